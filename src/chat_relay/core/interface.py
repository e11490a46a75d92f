"""
Abstract provider interface definition.

Defines the contract that all provider adapters must implement.
"""

from abc import ABC, abstractmethod
from typing import List, Sequence

from ..models.request import ChatOptions, Message
from ..models.response import ChatResult


class AbstractProvider(ABC):
    """
    Abstract base class for chat provider adapters.

    The registry and gateway only ever see this type; vendor specifics
    stay inside the concrete adapter.
    """

    DEFAULT_TEMPERATURE = 0.7
    DEFAULT_MAX_TOKENS = 1000

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Provider identifier.

        Returns:
            One of "openai", "gemini", "anthropic"
        """
        pass

    @property
    @abstractmethod
    def default_model(self) -> str:
        """Model used when a request does not name one."""
        pass

    @property
    def is_connected(self) -> bool:
        return True

    @abstractmethod
    async def connect(self) -> None:
        """
        Create the vendor client.

        Called lazily on first use.
        """
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """Release the vendor client."""
        pass

    @abstractmethod
    async def chat(self, messages: Sequence[Message], options: ChatOptions) -> ChatResult:
        """
        Send a conversation to the vendor and normalize its reply.

        Args:
            messages: Canonical, non-empty message list
            options: Per-call overrides; unset fields use adapter defaults

        Returns:
            Normalized chat result

        Raises:
            ProviderAPIError: The vendor returned an error response.
            httpx.RequestError: The vendor could not be reached.
        """
        pass

    @abstractmethod
    async def list_models(self) -> List[str]:
        """
        List model identifiers usable with this provider.

        Returns:
            Model identifiers
        """
        pass

    def redact(self, text: str) -> str:
        """Remove this provider's credential from ``text``."""
        return text

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, model={self.default_model!r})"
