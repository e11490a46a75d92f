"""
Shared HTTP plumbing for the vendor adapters.
"""

import logging
from abc import abstractmethod
from typing import Optional, Dict, Any, Tuple

import httpx

from ..core.config import ProviderSettings
from ..core.errors import ProviderAPIError
from ..core.interface import AbstractProvider
from ..models.request import ChatOptions

logger = logging.getLogger(__name__)


class HTTPProviderAdapter(AbstractProvider):
    """
    Provider adapter backed by an ``httpx.AsyncClient``.

    Subclasses set ``BASE_URL`` and implement ``_auth_headers``,
    ``chat`` and ``list_models``.
    """

    BASE_URL = ""

    def __init__(
        self,
        settings: ProviderSettings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize adapter.

        Args:
            settings: Credential, default model, base URL and timeout
            transport: Optional httpx transport (used to stub the vendor)
        """
        self._name = settings.name
        self._api_key = settings.api_key
        self._default_model = settings.default_model
        self._base_url = (settings.base_url or self.BASE_URL).rstrip("/")
        self._timeout = settings.timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def default_model(self) -> str:
        return self._default_model

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    @abstractmethod
    def _auth_headers(self) -> Dict[str, str]:
        """Vendor authentication headers built from the credential."""

    async def connect(self) -> None:
        """Initialize HTTP client for the vendor."""
        if self._client is not None:
            return

        headers = {"Content-Type": "application/json"}
        headers.update(self._auth_headers())

        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers=headers,
            timeout=self._timeout,
            transport=self._transport,
        )
        logger.info(f"Connected to {self._name} at {self._base_url}")

    async def disconnect(self) -> None:
        """Close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info(f"Disconnected from {self._name}")

    def _resolve_options(self, options: Optional[ChatOptions]) -> Tuple[str, float, int]:
        """Fill unset options with this adapter's defaults."""
        options = options or ChatOptions()
        model = options.model or self._default_model
        temperature = (
            options.temperature if options.temperature is not None
            else self.DEFAULT_TEMPERATURE
        )
        max_tokens = (
            options.max_tokens if options.max_tokens is not None
            else self.DEFAULT_MAX_TOKENS
        )
        return model, temperature, max_tokens

    async def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        if not self._client:
            await self.connect()

        response = await self._client.post(path, json=payload)
        self._check_response_errors(response)
        return response.json()

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        if not self._client:
            await self.connect()

        response = await self._client.get(path, params=params)
        self._check_response_errors(response)
        return response.json()

    def _check_response_errors(self, response: httpx.Response) -> None:
        """Raise ``ProviderAPIError`` carrying the vendor status and message."""
        if response.is_success:
            return

        message = f"Request failed: {response.status_code}"
        try:
            error_data = response.json()
        except ValueError:
            error_data = None

        vendor_message = None
        if isinstance(error_data, dict):
            error = error_data.get("error")
            if isinstance(error, dict) and error.get("message"):
                vendor_message = error["message"]
            elif isinstance(error, str) and error:
                vendor_message = error
            else:
                detail = error_data.get("message") or error_data.get("detail")
                if isinstance(detail, str) and detail:
                    vendor_message = f"{message} - {detail}"

        if vendor_message:
            message = vendor_message
        elif response.text:
            message = f"{message} - {response.text}"

        raise ProviderAPIError(
            self.redact(message),
            provider=self._name,
            status_code=response.status_code,
        )

    def redact(self, text: str) -> str:
        if self._api_key and text:
            return text.replace(self._api_key, "***")
        return text
