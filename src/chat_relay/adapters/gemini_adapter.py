"""
Google Gemini adapter.

Gemini has no system role and works in turns: a chat session holds the
history and only the current user turn is sent. System messages become a
synthetic user/model exchange at the point where they appear.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

import httpx

from .base import HTTPProviderAdapter
from ..core.errors import ProviderAPIError, ValidationError
from ..models.request import ChatOptions, Message
from ..models.response import ChatResult, Usage

logger = logging.getLogger(__name__)

SYSTEM_MARKER = "[System instructions]"
SYSTEM_ACK = "Understood. I will follow these instructions."

Turn = Dict[str, Any]


def _turn(role: str, text: str) -> Turn:
    return {"role": role, "parts": [{"text": text}]}


class GeminiChatSession:
    """
    A conversation seeded with history, advanced one user turn at a time.

    The history is only extended once the model has answered, so a
    failed send leaves the session unchanged.
    """

    def __init__(
        self,
        adapter: "GeminiAdapter",
        model: str,
        generation_config: Dict[str, Any],
        history: Optional[List[Turn]] = None,
    ):
        self._adapter = adapter
        self.model = model
        self.generation_config = generation_config
        self.history: List[Turn] = list(history or [])

    async def send_message(self, text: str) -> Dict[str, Any]:
        current = _turn("user", text)
        data = await self._adapter._post(
            f"/models/{self.model}:generateContent",
            {
                "contents": self.history + [current],
                "generationConfig": self.generation_config,
            },
        )
        candidates = data.get("candidates") or []
        if candidates:
            self.history.append(current)
            self.history.append(candidates[0].get("content") or _turn("model", ""))
        return data


class GeminiAdapter(HTTPProviderAdapter):
    """
    Google Generative Language API adapter.
    """

    BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
    GENERATE_METHOD = "generateContent"

    def _auth_headers(self):
        return {"x-goog-api-key": self._api_key}

    @staticmethod
    def build_turns(messages: Sequence[Message]) -> Tuple[List[Turn], str]:
        """
        Split canonical messages into chat history and the current turn.

        Returns:
            ``(history, current)`` where ``current`` is the text of the
            last message, which must come from the user.

        Raises:
            ValidationError: The conversation does not end on a user message.
        """
        if not messages or messages[-1].role != "user":
            raise ValidationError(
                "Conversation must end with a user message",
                provider="gemini",
            )

        history: List[Turn] = []
        for msg in messages[:-1]:
            if msg.role == "system":
                history.append(_turn("user", f"{SYSTEM_MARKER}\n{msg.content}"))
                history.append(_turn("model", SYSTEM_ACK))
            elif msg.role == "assistant":
                history.append(_turn("model", msg.content))
            else:
                history.append(_turn("user", msg.content))

        return history, messages[-1].content

    def start_chat(
        self,
        model: str,
        generation_config: Dict[str, Any],
        history: Optional[List[Turn]] = None,
    ) -> GeminiChatSession:
        return GeminiChatSession(self, model, generation_config, history)

    async def chat(self, messages: Sequence[Message], options: ChatOptions = None) -> ChatResult:
        """Send the last user message on a session seeded with the rest."""
        model, temperature, max_tokens = self._resolve_options(options)
        history, current = self.build_turns(messages)

        session = self.start_chat(
            model,
            {"temperature": temperature, "maxOutputTokens": max_tokens},
            history=history,
        )
        data = await session.send_message(current)
        return self.parse_response(data, model)

    def parse_response(self, data: Dict[str, Any], model: str) -> ChatResult:
        candidates = data.get("candidates") or []
        if not candidates:
            reason = (data.get("promptFeedback") or {}).get("blockReason", "no candidates")
            raise ProviderAPIError(
                f"Gemini returned no response ({reason})",
                provider=self._name,
            )

        parts = (candidates[0].get("content") or {}).get("parts") or []
        text = "".join(p.get("text", "") for p in parts)

        usage = data.get("usageMetadata") or {}
        return ChatResult(
            content=text,
            model=model,
            usage=Usage.from_counts(
                usage.get("promptTokenCount"),
                usage.get("candidatesTokenCount"),
                usage.get("totalTokenCount"),
            ),
        )

    async def list_models(self) -> List[str]:
        """List Gemini models that support content generation."""
        models: List[str] = []
        page_token = None

        try:
            while True:
                params = {"pageToken": page_token} if page_token else None
                data = await self._get("/models", params=params)
                for m in data.get("models", []):
                    if self.GENERATE_METHOD in m.get("supportedGenerationMethods", []):
                        models.append(m.get("name", "").replace("models/", "", 1))
                page_token = data.get("nextPageToken")
                if not page_token:
                    break
        except (ProviderAPIError, httpx.RequestError) as e:
            logger.error(f"Failed to list Gemini models: {e}")
            return []

        return models
