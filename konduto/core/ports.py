"""Port interfaces for the Konduto SDK.

These abstract base classes define the boundary between the order
operations in the core and the HTTP adapter that talks to the API.

1. **Driven Port** (core calls out to adapters)
   - ApiPort: Authenticated request dispatch and response decoding

2. **Driving Port** (client code calls into core)
   - OrderPort: The four public order operations
"""

from abc import ABC, abstractmethod
from typing import Any, Literal, TypeAlias

from .models import ApiResponse, Order

HttpMethod: TypeAlias = Literal["GET", "POST", "PUT"]

METHOD_GET: HttpMethod = "GET"
METHOD_POST: HttpMethod = "POST"
METHOD_PUT: HttpMethod = "PUT"


# ============================================================================
# DRIVEN PORT (Core calls out to adapters)
# ============================================================================


class ApiPort(ABC):
    """Port for sending requests to the Konduto API.

    Implementations own the credentials (API key and version), build the
    full URL from the configured endpoint, authenticate every request and
    decode the reply into an ApiResponse.

    Implementations must not retry, back off or cache: every call is a
    single blocking round trip.
    """

    @abstractmethod
    def set_api_key(self, key: str) -> None:
        """Replace the API key used for authentication.

        Args:
            key: 21-character key starting with "T" (test) or "P" (production).

        Raises:
            InvalidAPIKey: If the key does not match the format. The
                previous configuration is kept.
        """

    @abstractmethod
    def set_version(self, version: str) -> None:
        """Select the API version requests are routed to.

        Args:
            version: One of AVAILABLE_VERSIONS.

        Raises:
            InvalidVersion: If the version is unknown. The previous
                configuration is kept.
        """

    @abstractmethod
    def send_request(
        self,
        body: dict[str, Any] | None,
        method: HttpMethod,
        path: str,
    ) -> ApiResponse:
        """Send one request and decode the response.

        Args:
            body: JSON-serializable document for POST/PUT, None for GET.
            method: "GET", "POST" or "PUT".
            path: Path relative to the endpoint, e.g. "/orders/123".

        Returns:
            The decoded response envelope.

        Raises:
            SDKProtocolError: If the body is not a JSON object with a status.
            AuthenticationError: If the key was refused.
            ServerError: If the service failed with a 5xx status.
            httpx.RequestError: If the network call could not complete.
        """


# ============================================================================
# DRIVING PORT (Client code calls into core)
# ============================================================================


class OrderPort(ABC):
    """Public order operations offered by the SDK."""

    @abstractmethod
    def get_order(self, order_id: str | int) -> Order:
        """Fetch a previously sent order by id.

        Raises:
            InvalidOrder: If the id is malformed ("id").
            OrderNotFound: If the service has no such order.
            SDKProtocolError: If the reply lacks the "order" object.
        """

    @abstractmethod
    def analyze(self, order: Order, analyze: bool = True) -> bool:
        """Send an order, optionally asking for a recommendation.

        When analysis is requested and confirmed, the order is updated in
        place from the response (recommendation, score, status...).

        Raises:
            InvalidOrder: Carrying the order's validation errors.
        """

    @abstractmethod
    def send_order(self, order: Order) -> bool:
        """Persist an order without analyzing it."""

    @abstractmethod
    def update_order_status(
        self, order_id: str | int, status: str, comments: Any = ""
    ) -> bool:
        """Report the final outcome of an order.

        Raises:
            InvalidOrder: If the status ("status") or id ("id") is invalid.
            OrderNotFound: If the service has no such order.
            KondutoHTTPError: If the service rejected the update.
        """
