"""
Provider adapters for the supported chat vendors.
"""

from .base import HTTPProviderAdapter
from .openai_adapter import OpenAIAdapter
from .gemini_adapter import GeminiAdapter, GeminiChatSession
from .anthropic_adapter import AnthropicAdapter

ADAPTER_CLASSES = {
    "openai": OpenAIAdapter,
    "gemini": GeminiAdapter,
    "anthropic": AnthropicAdapter,
}

__all__ = [
    "ADAPTER_CLASSES",
    "HTTPProviderAdapter",
    "OpenAIAdapter",
    "GeminiAdapter",
    "GeminiChatSession",
    "AnthropicAdapter",
]
