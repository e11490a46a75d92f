"""
Configuration loading for the chat relay.
"""

import os
import logging
from typing import Dict, List, Any, Optional
from dataclasses import dataclass, field
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

PROVIDER_IDS = ("openai", "gemini", "anthropic")

_ENV_DEFAULTS = {
    "openai": {
        "api_key": "OPENAI_API_KEY",
        "model": ("OPENAI_MODEL", "gpt-4o-mini"),
        "base_url": "OPENAI_BASE_URL",
    },
    "gemini": {
        "api_key": "GEMINI_API_KEY",
        "model": ("GEMINI_MODEL", "gemini-2.0-flash-exp"),
        "base_url": "GEMINI_BASE_URL",
    },
    "anthropic": {
        "api_key": "ANTHROPIC_API_KEY",
        "model": ("ANTHROPIC_MODEL", "claude-3-5-sonnet-20241022"),
        "base_url": "ANTHROPIC_BASE_URL",
    },
}


@dataclass
class ProviderSettings:
    """Configuration for a single provider adapter."""
    name: str
    default_model: str
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    timeout: float = 60.0

    @property
    def has_credential(self) -> bool:
        return bool(self.api_key)


@dataclass
class RelayConfig:
    """Complete relay configuration."""
    providers: Dict[str, ProviderSettings] = field(default_factory=dict)
    host: str = "0.0.0.0"
    port: int = 3001
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    otel_endpoint: Optional[str] = None

    def credentials_present(self) -> Dict[str, bool]:
        """Report, per known provider, whether a credential is configured."""
        return {
            provider_id: bool(
                self.providers.get(provider_id)
                and self.providers[provider_id].has_credential
            )
            for provider_id in PROVIDER_IDS
        }


def load_config(config_path: Optional[str] = None) -> RelayConfig:
    """
    Load relay configuration.

    Reads a YAML file when one is found and falls back to the
    environment for everything the file leaves out.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Loaded configuration
    """
    if config_path is None:
        config_path = os.environ.get("CHAT_RELAY_CONFIG")

    if config_path is None:
        # Try common locations
        paths = [
            Path("config/chat-relay.yaml"),
            Path("/etc/chat-relay/chat-relay.yaml"),
            Path.home() / ".config/chat-relay/chat-relay.yaml",
        ]
        for p in paths:
            if p.exists():
                config_path = str(p)
                break

    if config_path is None or not Path(config_path).exists():
        logger.info("No relay config file found, using environment")
        return _default_config()

    try:
        with open(config_path, 'r') as f:
            data = yaml.safe_load(f) or {}

        return _parse_config(data)

    except Exception as e:
        logger.error(f"Failed to load config from {config_path}: {e}")
        return _default_config()


def _expand(value: Any) -> Any:
    """Expand a ``${VAR}`` reference from the environment."""
    if isinstance(value, str) and value.startswith("${") and value.endswith("}"):
        return os.environ.get(value[2:-1], "")
    return value


def _env_provider(provider_id: str) -> ProviderSettings:
    env = _ENV_DEFAULTS[provider_id]
    model_var, model_default = env["model"]
    return ProviderSettings(
        name=provider_id,
        api_key=os.environ.get(env["api_key"], ""),
        default_model=os.environ.get(model_var) or model_default,
        base_url=os.environ.get(env["base_url"]) or None,
        timeout=float(os.environ.get("PROVIDER_TIMEOUT", "60")),
    )


def _parse_config(data: Dict[str, Any]) -> RelayConfig:
    """Parse configuration dictionary."""
    config = _default_config()
    providers_data = data.get("providers", {}) or {}

    for provider_id, p_data in providers_data.items():
        if provider_id not in PROVIDER_IDS:
            logger.warning(f"Ignoring unknown provider in config: {provider_id}")
            continue

        settings = config.providers[provider_id]
        p_data = p_data or {}
        if "api_key" in p_data:
            settings.api_key = _expand(p_data["api_key"])
        if p_data.get("model"):
            settings.default_model = _expand(p_data["model"])
        if p_data.get("base_url"):
            settings.base_url = _expand(p_data["base_url"])
        if "timeout" in p_data:
            settings.timeout = float(p_data["timeout"])

    server = data.get("server", {}) or {}
    config.host = server.get("host", config.host)
    config.port = int(server.get("port", config.port))
    config.cors_origins = server.get("cors_origins", config.cors_origins)

    telemetry = data.get("telemetry", {}) or {}
    config.otel_endpoint = _expand(telemetry.get("otlp_endpoint")) or config.otel_endpoint

    return config


def _default_config() -> RelayConfig:
    """Return configuration built from the environment."""
    origins = os.environ.get("CORS_ORIGINS", "*")
    return RelayConfig(
        providers={provider_id: _env_provider(provider_id) for provider_id in PROVIDER_IDS},
        host=os.environ.get("HOST", "0.0.0.0"),
        port=int(os.environ.get("PORT", "3001")),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        otel_endpoint=os.environ.get("OTEL_EXPORTER_OTLP_ENDPOINT") or None,
    )
