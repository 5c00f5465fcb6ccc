"""Konduto API HTTP adapter.

Implements ApiPort with a synchronous httpx client. Builds the request URL
from the configured endpoint, authenticates with the API key (HTTP Basic,
key as user name) and decodes JSON replies into ApiResponse envelopes.
"""

import logging
from types import TracebackType
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError

from konduto.core.exceptions import (
    AuthenticationError,
    SDKProtocolError,
    ServerError,
)
from konduto.core.models import (
    CURRENT_VERSION,
    DEFAULT_BASE_URL,
    ApiCredentials,
    ApiResponse,
)
from konduto.core.ports import ApiPort, HttpMethod

logger = logging.getLogger(__name__)

ALLOWED_METHODS: frozenset[str] = frozenset({"GET", "POST", "PUT"})
DEFAULT_TIMEOUT_SECONDS = 30.0


class ResponseEnvelope(BaseModel):
    """Wire shape shared by every Konduto reply."""

    model_config = ConfigDict(extra="allow")

    status: str
    order: dict[str, Any] | None = None
    message: Any = None


class ApiControl(ApiPort):
    """httpx-backed access to the Konduto REST API."""

    def __init__(
        self,
        api_key: str,
        version: str = CURRENT_VERSION,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the API adapter.

        Args:
            api_key: 21-character key starting with "T" or "P".
            version: API version (default: the current version).
            base_url: Base URL of the API (default: https://api.konduto.com).
            timeout_seconds: Timeout applied to every request.
            transport: Optional httpx transport, e.g. httpx.MockTransport.

        Raises:
            InvalidAPIKey: If api_key is malformed.
            InvalidVersion: If version is not supported.
        """
        self.credentials = ApiCredentials(
            api_key=api_key, version=version, base_url=base_url
        )
        self.timeout_seconds = timeout_seconds
        self._transport = transport
        self._client: httpx.Client | None = None

    def __enter__(self) -> "ApiControl":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def _get_client(self) -> httpx.Client:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                timeout=self.timeout_seconds,
                headers={"Accept": "application/json"},
                transport=self._transport,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    @property
    def endpoint(self) -> str:
        return self.credentials.endpoint

    def set_api_key(self, key: str) -> None:
        """Replace the API key; the previous key is kept if ``key`` is invalid."""
        self.credentials = ApiCredentials(
            api_key=key,
            version=self.credentials.version,
            base_url=self.credentials.base_url,
        )
        logger.info(
            "Konduto API key configured",
            extra={"production": self.credentials.is_production},
        )

    def set_version(self, version: str) -> None:
        """Select the API version; unknown versions leave the current one."""
        self.credentials = ApiCredentials(
            api_key=self.credentials.api_key,
            version=version,
            base_url=self.credentials.base_url,
        )
        logger.info(
            f"Konduto API version set to {version}",
            extra={"endpoint": self.credentials.endpoint},
        )

    def send_request(
        self,
        body: dict[str, Any] | None,
        method: HttpMethod,
        path: str,
    ) -> ApiResponse:
        """Perform one blocking request and decode the reply."""
        if method not in ALLOWED_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")

        credentials = self.credentials
        url = f"{credentials.endpoint}{path}"

        logger.debug(
            f"{method} {url}",
            extra={"method": method, "path": path},
        )

        try:
            response = self._get_client().request(
                method,
                url,
                json=body if method != "GET" else None,
                auth=(credentials.api_key, ""),
            )
        except httpx.RequestError as e:
            logger.error(
                f"Request to Konduto failed: {e}",
                extra={"method": method, "path": path},
            )
            raise

        return self._decode(response, method, path)

    def _decode(
        self, response: httpx.Response, method: str, path: str
    ) -> ApiResponse:
        """Map the HTTP status and decode the JSON body into an envelope.

        Raises:
            AuthenticationError: On HTTP 401/403.
            ServerError: On HTTP 5xx.
            SDKProtocolError: If the body is not a JSON object with a status.
        """
        status_code = response.status_code

        if status_code in (401, 403):
            logger.error(
                f"Konduto refused the API key: HTTP {status_code}",
                extra={"method": method, "path": path},
            )
            raise AuthenticationError(status_code)

        if status_code >= 500:
            logger.error(
                f"Konduto server error: HTTP {status_code}",
                extra={"method": method, "path": path, "response": response.text},
            )
            raise ServerError(status_code)

        try:
            data = response.json()
        except ValueError as e:
            if status_code == 404:
                return ApiResponse(http_status=status_code, status="error")
            logger.error(
                f"Konduto response is not valid JSON: {e}",
                extra={"method": method, "path": path, "http_status": status_code},
            )
            raise SDKProtocolError("Response body is not valid JSON") from e

        if not isinstance(data, dict):
            if status_code == 404:
                return ApiResponse(http_status=status_code, status="error")
            raise SDKProtocolError("Response body is not a JSON object")

        try:
            envelope = ResponseEnvelope.model_validate(data)
        except ValidationError as e:
            # A 404 is a not-found marker whatever its body looks like.
            if status_code == 404:
                return ApiResponse(
                    http_status=status_code,
                    status=str(data.get("status", "error")),
                    message=data.get("message"),
                    body=data,
                )
            logger.error(
                f"Unexpected Konduto response shape: {e}",
                extra={"method": method, "path": path, "http_status": status_code},
            )
            raise SDKProtocolError("Response is missing required fields", data) from e

        return ApiResponse(
            http_status=status_code,
            status=envelope.status,
            order=envelope.order,
            message=envelope.message,
            body=data,
        )
