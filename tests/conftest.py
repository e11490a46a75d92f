"""
Shared fixtures: stubbed vendor endpoints and ready-made adapters.
"""

import json
from typing import Any, Dict, List, Tuple

import httpx
import pytest

from chat_relay.adapters import AnthropicAdapter, GeminiAdapter, OpenAIAdapter
from chat_relay.core.config import ProviderSettings, RelayConfig
from chat_relay.core.registry import ProviderRegistry


class StubVendor:
    """
    Fake vendor API served through ``httpx.MockTransport``.

    Routes map a URL path suffix to ``(status, json_body)``. Every request
    is recorded so tests can count network calls and inspect payloads.
    """

    def __init__(self, routes: Dict[str, Tuple[int, Any]] = None):
        self.routes = dict(routes or {})
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        for suffix, (status, body) in self.routes.items():
            if request.url.path.endswith(suffix):
                return httpx.Response(status, json=body)
        return httpx.Response(404, json={"error": {"message": "not found"}})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def calls(self) -> int:
        return len(self.requests)

    def last_json(self) -> Dict[str, Any]:
        return json.loads(self.requests[-1].content)


OPENAI_REPLY = {
    "id": "chatcmpl-123",
    "object": "chat.completion",
    "model": "gpt-4o-mini-2024-07-18",
    "choices": [
        {
            "index": 0,
            "message": {"role": "assistant", "content": "hello"},
            "finish_reason": "stop",
        }
    ],
    "usage": {"prompt_tokens": 1, "completion_tokens": 1, "total_tokens": 2},
}

GEMINI_REPLY = {
    "candidates": [
        {
            "content": {"role": "model", "parts": [{"text": "Hi from Gemini"}]},
            "finishReason": "STOP",
        }
    ],
    "usageMetadata": {
        "promptTokenCount": 12,
        "candidatesTokenCount": 4,
        "totalTokenCount": 16,
    },
}

ANTHROPIC_REPLY = {
    "id": "msg_123",
    "type": "message",
    "role": "assistant",
    "model": "claude-3-5-sonnet-20241022",
    "content": [{"type": "text", "text": "Hi from Claude"}],
    "stop_reason": "end_turn",
    "usage": {"input_tokens": 10, "output_tokens": 5},
}


def make_settings(name: str, api_key: str = "test-key", model: str = None) -> ProviderSettings:
    defaults = {
        "openai": "gpt-4o-mini",
        "gemini": "gemini-2.0-flash-exp",
        "anthropic": "claude-3-5-sonnet-20241022",
    }
    return ProviderSettings(name=name, api_key=api_key, default_model=model or defaults[name])


@pytest.fixture
def openai_vendor():
    return StubVendor({"/chat/completions": (200, OPENAI_REPLY)})


@pytest.fixture
def gemini_vendor():
    return StubVendor({":generateContent": (200, GEMINI_REPLY)})


@pytest.fixture
def anthropic_vendor():
    return StubVendor({"/messages": (200, ANTHROPIC_REPLY)})


@pytest.fixture
def openai_adapter(openai_vendor):
    return OpenAIAdapter(make_settings("openai"), transport=openai_vendor.transport)


@pytest.fixture
def gemini_adapter(gemini_vendor):
    return GeminiAdapter(make_settings("gemini"), transport=gemini_vendor.transport)


@pytest.fixture
def anthropic_adapter(anthropic_vendor):
    return AnthropicAdapter(make_settings("anthropic"), transport=anthropic_vendor.transport)


@pytest.fixture
def full_registry(openai_adapter, gemini_adapter, anthropic_adapter):
    return ProviderRegistry({
        "openai": openai_adapter,
        "gemini": gemini_adapter,
        "anthropic": anthropic_adapter,
    })


@pytest.fixture
def relay_config():
    return RelayConfig(providers={
        "openai": make_settings("openai"),
        "gemini": make_settings("gemini", api_key=""),
        "anthropic": make_settings("anthropic"),
    })
