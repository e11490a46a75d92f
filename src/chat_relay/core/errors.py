"""
Chat relay error types.

Gateway errors map one-to-one onto the HTTP status and envelope returned
to the caller. ``ProviderAPIError`` is what adapters raise for a failed
vendor call; the gateway classifies it into one of the gateway errors.
"""

from typing import List, Optional

from ..models.response import ErrorEnvelope


class GatewayError(Exception):
    """Base exception for gateway errors."""

    status_code: int = 500

    def __init__(self, message: str, provider: str = None, detail: str = None):
        self.message = message
        self.provider = provider
        self.detail = detail
        super().__init__(message)

    def to_envelope(self) -> ErrorEnvelope:
        return ErrorEnvelope(error=self.message, message=self.detail)


class ValidationError(GatewayError):
    """Raised when the caller sent an invalid request."""

    status_code = 400

    def __init__(
        self,
        message: str,
        provider: str = None,
        detail: str = None,
        available_providers: Optional[List[str]] = None,
    ):
        super().__init__(message, provider, detail)
        self.available_providers = available_providers

    def to_envelope(self) -> ErrorEnvelope:
        return ErrorEnvelope(
            error=self.message,
            message=self.detail,
            available_providers=self.available_providers,
        )


class AuthenticationError(GatewayError):
    """Raised when the vendor rejected the configured credential."""

    status_code = 401


class RateLimitError(GatewayError):
    """Raised when the vendor throttled the request."""

    status_code = 429


class UnclassifiedError(GatewayError):
    """Raised for any other vendor or network failure."""

    status_code = 500


class ProviderAPIError(Exception):
    """Raised by adapters when a vendor call returns an error response."""

    def __init__(self, message: str, provider: str = None, status_code: int = None):
        self.message = message
        self.provider = provider
        self.status_code = status_code
        super().__init__(message)
