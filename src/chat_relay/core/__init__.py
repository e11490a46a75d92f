"""
Core chat relay components.
"""

from .errors import (
    GatewayError,
    ValidationError,
    AuthenticationError,
    RateLimitError,
    UnclassifiedError,
    ProviderAPIError,
)
from .config import ProviderSettings, RelayConfig, load_config
from .interface import AbstractProvider
from .registry import ProviderRegistry
from .gateway import ChatGateway, GatewayResponse

__all__ = [
    "AbstractProvider",
    "ProviderRegistry",
    "ChatGateway",
    "GatewayResponse",
    "ProviderSettings",
    "RelayConfig",
    "load_config",
    "GatewayError",
    "ValidationError",
    "AuthenticationError",
    "RateLimitError",
    "UnclassifiedError",
    "ProviderAPIError",
]
