"""
Chat Relay

A thin HTTP relay in front of several chat model vendors:
- One canonical message format for every provider
- Adapters for OpenAI, Google Gemini and Anthropic
- Provider registry built from the configured credentials
- Uniform success and error envelopes
"""

from .core.interface import AbstractProvider
from .core.registry import ProviderRegistry
from .core.gateway import ChatGateway
from .core.config import RelayConfig, load_config
from .models.request import ChatRequest, ChatOptions, Message
from .models.response import ChatResult, Usage

__version__ = "1.0.0"

__all__ = [
    "AbstractProvider",
    "ProviderRegistry",
    "ChatGateway",
    "RelayConfig",
    "load_config",
    "ChatRequest",
    "ChatOptions",
    "Message",
    "ChatResult",
    "Usage",
]
