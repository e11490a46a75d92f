"""
Anthropic Messages API adapter.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .base import HTTPProviderAdapter
from ..core.errors import ProviderAPIError
from ..models.request import ChatOptions, Message
from ..models.response import ChatResult, Usage

logger = logging.getLogger(__name__)


class AnthropicAdapter(HTTPProviderAdapter):
    """
    Anthropic API adapter.

    The system prompt travels in a top-level ``system`` field and the
    message list only carries user and assistant turns.
    """

    BASE_URL = "https://api.anthropic.com/v1"
    ANTHROPIC_VERSION = "2023-06-01"

    # Anthropic has no public models endpoint; keep in sync with
    # https://docs.anthropic.com/en/docs/about-claude/models by hand.
    KNOWN_MODELS = (
        "claude-3-5-sonnet-20241022",
        "claude-3-5-haiku-20241022",
        "claude-3-opus-20240229",
        "claude-3-sonnet-20240229",
        "claude-3-haiku-20240307",
    )

    def _auth_headers(self):
        return {
            "x-api-key": self._api_key,
            "anthropic-version": self.ANTHROPIC_VERSION,
        }

    @staticmethod
    def convert_messages(messages: Sequence[Message]) -> Tuple[Optional[str], List[Dict[str, str]]]:
        """
        Hoist system content out of the message list.

        Several system messages are joined with a blank line.
        """
        system_parts: List[str] = []
        converted: List[Dict[str, str]] = []

        for m in messages:
            if m.role == "system":
                system_parts.append(m.content)
            else:
                converted.append({
                    "role": "assistant" if m.role == "assistant" else "user",
                    "content": m.content,
                })

        system = "\n\n".join(system_parts) if system_parts else None
        return system, converted

    def build_payload(self, messages: Sequence[Message], options: ChatOptions = None) -> Dict[str, Any]:
        model, temperature, max_tokens = self._resolve_options(options)
        system, converted = self.convert_messages(messages)

        data = {
            "model": model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": converted,
        }
        if system:
            data["system"] = system
        return data

    async def chat(self, messages: Sequence[Message], options: ChatOptions = None) -> ChatResult:
        """Create a message via Anthropic API."""
        payload = self.build_payload(messages, options)
        data = await self._post("/messages", payload)
        return self.parse_response(data, requested_model=payload["model"])

    def parse_response(self, data: Dict[str, Any], requested_model: str = "") -> ChatResult:
        blocks = data.get("content") or []
        text_blocks = [b.get("text", "") for b in blocks if b.get("type") == "text"]
        if not text_blocks:
            raise ProviderAPIError("Response contained no text content", provider=self._name)

        usage = data.get("usage") or {}
        input_tokens = usage.get("input_tokens") or 0
        output_tokens = usage.get("output_tokens") or 0
        return ChatResult(
            content="".join(text_blocks),
            model=data.get("model") or requested_model,
            usage=Usage(
                prompt_tokens=input_tokens,
                completion_tokens=output_tokens,
                total_tokens=input_tokens + output_tokens,
            ),
        )

    async def list_models(self) -> List[str]:
        """
        List known Anthropic models.

        Note: Anthropic doesn't have a models endpoint, so we return
        a hardcoded list of known models.
        """
        return list(self.KNOWN_MODELS)
