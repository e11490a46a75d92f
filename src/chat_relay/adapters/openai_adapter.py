"""
OpenAI chat completions adapter.

Canonical messages already match OpenAI's system/user/assistant roles,
so they are sent unchanged.
"""

import logging
from typing import List, Sequence

import httpx

from .base import HTTPProviderAdapter
from ..core.errors import ProviderAPIError
from ..models.request import ChatOptions, Message
from ..models.response import ChatResult, Usage

logger = logging.getLogger(__name__)


class OpenAIAdapter(HTTPProviderAdapter):
    """
    OpenAI API adapter.

    Also works against any OpenAI-compatible endpoint configured
    through ``base_url``.
    """

    BASE_URL = "https://api.openai.com/v1"
    MODEL_FAMILY = "gpt"

    def _auth_headers(self):
        return {"Authorization": f"Bearer {self._api_key}"}

    def build_payload(self, messages: Sequence[Message], options: ChatOptions = None) -> dict:
        """Convert canonical messages and options to a completions request."""
        model, temperature, max_tokens = self._resolve_options(options)
        return {
            "model": model,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
            "temperature": temperature,
            "max_tokens": max_tokens,
        }

    async def chat(self, messages: Sequence[Message], options: ChatOptions = None) -> ChatResult:
        """Create a chat completion via OpenAI API."""
        payload = self.build_payload(messages, options)
        data = await self._post("/chat/completions", payload)
        return self.parse_response(data, requested_model=payload["model"])

    def parse_response(self, data: dict, requested_model: str = "") -> ChatResult:
        choices = data.get("choices") or []
        if not choices:
            raise ProviderAPIError("Response contained no choices", provider=self._name)

        usage = data.get("usage") or {}
        return ChatResult(
            content=choices[0].get("message", {}).get("content") or "",
            model=data.get("model") or requested_model,
            usage=Usage.from_counts(
                usage.get("prompt_tokens"),
                usage.get("completion_tokens"),
                usage.get("total_tokens"),
            ),
        )

    async def list_models(self) -> List[str]:
        """List OpenAI chat model identifiers."""
        try:
            data = await self._get("/models")
        except (ProviderAPIError, httpx.RequestError) as e:
            logger.error(f"Failed to list OpenAI models: {e}")
            return []

        return [
            m["id"] for m in data.get("data", [])
            if self.MODEL_FAMILY in m.get("id", "")
        ]
