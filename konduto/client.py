"""Public entry point of the Konduto SDK.

A Konduto object bundles its own configuration (API key and version) with
the HTTP adapter and the order service, so several clients with different
keys can coexist in one process.

The available methods are:
- set_api_key
- set_version
- send_order
- analyze
- update_order_status
- get_order
"""

from types import TracebackType
from typing import Any

import httpx

from konduto.adapters.http.api_control import DEFAULT_TIMEOUT_SECONDS, ApiControl
from konduto.config import KondutoSettings
from konduto.core.models import CURRENT_VERSION, DEFAULT_BASE_URL, Order
from konduto.core.order_service import OrderService
from konduto.core.ports import ApiPort


class Konduto:
    """Client for the Konduto fraud-analysis API."""

    def __init__(
        self,
        api_key: str | None = None,
        version: str = CURRENT_VERSION,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
        api: ApiPort | None = None,
    ):
        """Initialize the client.

        Args:
            api_key: 21-character key starting with "T" or "P". Required
                unless ``api`` is given.
            version: API version.
            base_url: Base URL of the API.
            timeout_seconds: Timeout applied to every request.
            transport: Optional httpx transport for the default adapter.
            api: Use this ApiPort instead of building an ApiControl.

        Raises:
            InvalidAPIKey: If api_key is malformed.
            InvalidVersion: If version is not supported.
        """
        if api is None:
            if api_key is None:
                raise ValueError("api_key must be provided")
            api = ApiControl(
                api_key=api_key,
                version=version,
                base_url=base_url,
                timeout_seconds=timeout_seconds,
                transport=transport,
            )
        self.api = api
        self.orders = OrderService(api)

    @classmethod
    def from_settings(
        cls,
        settings: KondutoSettings,
        transport: httpx.BaseTransport | None = None,
    ) -> "Konduto":
        """Build a client from loaded settings."""
        return cls(
            api_key=settings.api_key,
            version=settings.api_version,
            base_url=settings.api_base_url,
            timeout_seconds=settings.timeout_seconds,
            transport=transport,
        )

    def __enter__(self) -> "Konduto":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Release the HTTP connection pool, if the adapter holds one."""
        close = getattr(self.api, "close", None)
        if close is not None:
            close()

    def set_api_key(self, key: str) -> bool:
        """Set the API key used to authenticate requests.

        Raises:
            InvalidAPIKey: If the key is not valid. The previous key is kept.
        """
        self.api.set_api_key(key)
        return True

    def set_version(self, version: str = CURRENT_VERSION) -> None:
        """Set the Konduto API version used for requests.

        Raises:
            InvalidVersion: If the version does not exist.
        """
        self.api.set_version(version)

    def get_order(self, order_id: str | int) -> Order:
        return self.orders.get_order(order_id)

    def analyze(self, order: Order, analyze: bool = True) -> bool:
        return self.orders.analyze(order, analyze)

    def send_order(self, order: Order) -> bool:
        return self.orders.send_order(order)

    def update_order_status(
        self, order_id: str | int, status: str, comments: Any = ""
    ) -> bool:
        return self.orders.update_order_status(order_id, status, comments)
