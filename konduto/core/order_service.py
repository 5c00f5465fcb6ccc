"""Order service: implements OrderPort on top of an ApiPort.

Validates input locally, dispatches one request per operation through the
API port and interprets the decoded reply. No operation is retried.
"""

import logging
from typing import Any

from .exceptions import InvalidOrder, KondutoHTTPError, SDKProtocolError
from .models import Order
from .ports import METHOD_GET, METHOD_POST, METHOD_PUT, ApiPort, OrderPort
from .responses import check_post_response, was_order_found
from .validation import ValidationSchema

logger = logging.getLogger(__name__)


class OrderService(OrderPort):
    """Core implementation of OrderPort."""

    def __init__(self, api: ApiPort):
        """Initialize the order service.

        Args:
            api: ApiPort implementation used for every request.
        """
        self.api = api

    def get_order(self, order_id: str | int) -> Order:
        """Query an order previously sent to Konduto.

        Args:
            order_id: Id of the order.

        Returns:
            A new Order populated from the response.

        Raises:
            InvalidOrder: If order_id is not a valid id.
            OrderNotFound: If the service has no such order.
            SDKProtocolError: If the response has no "order" object or its
                data is malformed.
        """
        if not ValidationSchema.validate_field("order", "id", order_id):
            raise InvalidOrder("id")

        response = self.api.send_request(None, METHOD_GET, f"/orders/{order_id}")

        was_order_found(response, order_id)

        if response.order is None:
            raise SDKProtocolError(
                f"Response for order {order_id} has no order data",
                dict(response.body),
            )

        try:
            return Order.from_dict(response.order)
        except (TypeError, ValueError) as e:
            raise SDKProtocolError(
                f"Order data for {order_id} is malformed: {e}",
                dict(response.body),
            ) from e

    def analyze(self, order: Order, analyze: bool = True) -> bool:
        """Send an order for analysis and populate its recommendation.

        Args:
            order: A valid Order. Updated in place when analysis is
                requested and the response confirms it.
            analyze: If False, the order is stored by Konduto but not scored.

        Returns:
            True once the request was dispatched.

        Raises:
            InvalidOrder: If the order has validation errors. Nothing is sent.
            SDKProtocolError: If the analysis data in the response is malformed.
        """
        result = order.validate()
        if not result.ok:
            raise InvalidOrder(result.errors)

        body = order.to_dict()
        if analyze is False:
            body["analyze"] = False

        response = self.api.send_request(body, METHOD_POST, "/orders")

        if check_post_response(response, order.id) and analyze is True:
            try:
                order.update_from(response.order or {})
            except (TypeError, ValueError) as e:
                raise SDKProtocolError(
                    f"Analysis data for order {order.id} is malformed: {e}",
                    dict(response.body),
                ) from e
            logger.info(
                f"Order {order.id} analyzed",
                extra={
                    "order_id": order.id,
                    "recommendation": order.recommendation.value
                    if order.recommendation
                    else None,
                    "score": order.score,
                },
            )

        return True

    def send_order(self, order: Order) -> bool:
        """Persist an order without analyzing it.

        Alias for analyze(order, False).
        """
        return self.analyze(order, False)

    def update_order_status(
        self, order_id: str | int, status: str, comments: Any = ""
    ) -> bool:
        """Update the status of an existing order.

        Sends the outcome of the order to Konduto so it can improve its
        recommendations.

        Args:
            order_id: Id of the order being updated.
            status: One of "approved", "declined", "fraud", "canceled" or
                "not_authorized".
            comments: Why the status is being updated. Coerced to str.

        Returns:
            True if the order was found and the update accepted.

        Raises:
            InvalidOrder: If status or order_id are not valid.
            OrderNotFound: If the service has no such order.
            KondutoHTTPError: If the service rejected the update.
        """
        if status not in Order.AVAILABLE_STATUS:
            raise InvalidOrder("status")

        if not ValidationSchema.validate_field("order", "id", order_id):
            raise InvalidOrder("id")

        body = {"status": status, "comments": f"{comments}"}

        response = self.api.send_request(body, METHOD_PUT, f"/orders/{order_id}")

        found = was_order_found(response, order_id)
        if response.is_error:
            logger.error(
                f"Status update for order {order_id} rejected: {response.message_text}",
                extra={"order_id": order_id, "http_status": response.http_status},
            )
            raise KondutoHTTPError(
                response.http_status,
                f"Status update rejected: {response.message_text}",
            )

        logger.info(
            f"Order {order_id} status updated to {status}",
            extra={"order_id": order_id, "status": status},
        )
        return found
