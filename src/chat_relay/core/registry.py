"""
Provider registry: the adapters available to this process.
"""

import logging
from types import MappingProxyType
from typing import Callable, Dict, FrozenSet, List, Mapping, Optional, Any

from .config import PROVIDER_IDS, ProviderSettings, RelayConfig
from .interface import AbstractProvider

logger = logging.getLogger(__name__)

AdapterFactory = Callable[[ProviderSettings], AbstractProvider]


class ProviderRegistry:
    """
    Immutable mapping from provider id to adapter.

    Built once at start-up from the configured credentials. A provider
    whose credential was missing at that moment stays unavailable until
    the process is restarted.
    """

    def __init__(self, adapters: Mapping[str, AbstractProvider]):
        self._adapters = MappingProxyType(dict(adapters))

    @classmethod
    def from_config(
        cls,
        config: RelayConfig,
        factories: Optional[Mapping[str, AdapterFactory]] = None,
    ) -> "ProviderRegistry":
        """
        Instantiate an adapter for every provider with a credential.

        Args:
            config: Relay configuration
            factories: Provider id to adapter factory; defaults to the
                built-in adapter classes

        Returns:
            Populated registry
        """
        if factories is None:
            from ..adapters import ADAPTER_CLASSES
            factories = ADAPTER_CLASSES

        adapters: Dict[str, AbstractProvider] = {}
        for provider_id in PROVIDER_IDS:
            settings = config.providers.get(provider_id)
            if settings is None or not settings.has_credential:
                continue
            adapters[provider_id] = factories[provider_id](settings)
            logger.info(f"Registered provider: {provider_id} (default model: {settings.default_model})")

        return cls(adapters)

    def has(self, provider_id: str) -> bool:
        return provider_id in self._adapters

    def get(self, provider_id: str) -> Optional[AbstractProvider]:
        """Return the adapter, or None when ``has(provider_id)`` is False."""
        return self._adapters.get(provider_id)

    def keys(self) -> FrozenSet[str]:
        return frozenset(self._adapters)

    def names(self) -> List[str]:
        """Configured provider ids in registration order."""
        return list(self._adapters)

    def list_providers(self) -> List[Dict[str, Any]]:
        return [
            {"name": adapter.name, "default_model": adapter.default_model}
            for adapter in self._adapters.values()
        ]

    def redact(self, text: str) -> str:
        """Remove every configured credential from ``text``."""
        for adapter in self._adapters.values():
            text = adapter.redact(text)
        return text

    def __len__(self) -> int:
        return len(self._adapters)

    async def disconnect_all(self) -> None:
        """Close every adapter's vendor client."""
        for adapter in self._adapters.values():
            try:
                await adapter.disconnect()
            except Exception as e:
                logger.error(f"Failed to disconnect provider {adapter.name}: {e}")
