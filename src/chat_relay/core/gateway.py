"""
Chat gateway: request validation, provider dispatch and error mapping.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError as SchemaError

from .errors import (
    AuthenticationError,
    GatewayError,
    RateLimitError,
    UnclassifiedError,
    ValidationError,
)
from .interface import AbstractProvider
from .registry import ProviderRegistry
from ..models.request import ChatRequest
from ..models.response import ChatEnvelope

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER = "openai"
MESSAGES_REQUIRED = 'Field "messages" is required and must be a non-empty array'


@dataclass
class GatewayResponse:
    """HTTP status and JSON body produced for one chat request."""
    status_code: int
    body: Dict[str, Any]


def _status_code_of(exc: BaseException) -> Optional[int]:
    """Vendor HTTP status carried by an exception, if any."""
    status = getattr(exc, "status_code", None)
    if status is None:
        response = getattr(exc, "response", None)
        status = getattr(response, "status_code", None)
    return status if isinstance(status, int) else None


def _schema_detail(exc: SchemaError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{location}: {err.get('msg')}")
    return "; ".join(parts)


class ChatGateway:
    """
    Stateless request handler in front of the provider registry.

    Every call validates the request, forwards it to exactly one adapter
    and turns the outcome into a success or error envelope. Nothing is
    retried and nothing is kept between calls.
    """

    def __init__(self, registry: ProviderRegistry):
        self._registry = registry

    @property
    def registry(self) -> ProviderRegistry:
        return self._registry

    async def handle(self, payload: Any) -> GatewayResponse:
        """
        Process one inbound chat request.

        Args:
            payload: Decoded JSON body

        Returns:
            Status code and envelope body
        """
        try:
            envelope = await self.chat(payload)
        except GatewayError as e:
            return GatewayResponse(e.status_code, e.to_envelope().to_dict())
        return GatewayResponse(200, envelope.to_dict())

    async def chat(self, payload: Any) -> ChatEnvelope:
        """
        Validate, dispatch and normalize a chat request.

        Raises:
            GatewayError: One of the classified gateway errors.
        """
        request = self.validate(payload)
        adapter = self.resolve(request.provider)
        options = request.to_options()

        logger.info(f"Processing message with {request.provider}...")
        try:
            result = await adapter.chat(request.messages, options)
        except GatewayError:
            raise
        except Exception as e:
            error = self.classify_error(e, adapter)
            if error.detail:
                error.detail = self._registry.redact(error.detail)
            logger.error(f"Chat with {adapter.name} failed: {error.message} ({error.detail})")
            raise error from e

        return ChatEnvelope.from_result(request.provider, result)

    def validate(self, payload: Any) -> ChatRequest:
        """Check the raw request before anything reaches a vendor."""
        if not isinstance(payload, dict):
            raise ValidationError(MESSAGES_REQUIRED)

        messages = payload.get("messages")
        if not isinstance(messages, list) or len(messages) == 0:
            raise ValidationError(MESSAGES_REQUIRED)

        provider = payload.get("provider")
        if provider is None:
            provider = DEFAULT_PROVIDER
            payload = {**payload, "provider": provider}
        if not isinstance(provider, str) or not self._registry.has(provider):
            raise self._unknown_provider(str(provider))

        try:
            return ChatRequest.model_validate(payload)
        except SchemaError as e:
            raise ValidationError("Invalid chat request", detail=_schema_detail(e))

    def resolve(self, provider: str) -> AbstractProvider:
        """Look up the adapter for ``provider``."""
        if not self._registry.has(provider):
            raise self._unknown_provider(provider)
        return self._registry.get(provider)

    def _unknown_provider(self, provider: str) -> ValidationError:
        return ValidationError(
            f'Provider "{provider}" is not configured or does not exist',
            provider=provider,
            available_providers=self._registry.names(),
        )

    @staticmethod
    def classify_error(exc: Exception, adapter: AbstractProvider) -> GatewayError:
        """Map an adapter failure onto the gateway error taxonomy."""
        status = _status_code_of(exc)
        message = adapter.redact(str(exc)) or exc.__class__.__name__

        if status == 401:
            return AuthenticationError("Invalid API key", provider=adapter.name, detail=message)

        if status == 429:
            return RateLimitError(
                "Rate limit exceeded",
                provider=adapter.name,
                detail="Try again in a few moments",
            )

        if isinstance(exc, httpx.RequestError):
            message = adapter.redact(f"{exc.__class__.__name__}: {exc}")

        return UnclassifiedError("Failed to process message", provider=adapter.name, detail=message)
