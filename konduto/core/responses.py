"""Inspection helpers shared by the order operations.

Both helpers work on an already decoded ApiResponse and never perform I/O.
"""

import logging

from .exceptions import OrderNotFound, SDKProtocolError
from .models import ApiResponse

logger = logging.getLogger(__name__)

HTTP_NOT_FOUND = 404
NOT_FOUND_MARKER = "not found"


def check_post_response(response: ApiResponse, order_id: str | int) -> bool:
    """Tell whether a POST /orders reply confirms success for ``order_id``.

    Args:
        response: Decoded reply of the POST.
        order_id: Id of the order that was sent.

    Returns:
        True if the service reports "ok" for this order, False if it
        reports a recoverable error (e.g. the order was already analyzed)
        or echoes a different order id.

    Raises:
        SDKProtocolError: If an "ok" reply has no order id to check.
    """
    if response.is_error:
        logger.warning(
            f"Order {order_id} was not accepted: {response.message_text}",
            extra={"order_id": order_id, "http_status": response.http_status},
        )
        return False

    if not response.is_ok:
        return False

    if response.order is None or "id" not in response.order:
        raise SDKProtocolError(
            "Response to POST /orders has no order id", dict(response.body)
        )

    return str(response.order["id"]) == str(order_id)


def was_order_found(response: ApiResponse, order_id: str | int) -> bool:
    """Raise OrderNotFound if the reply says ``order_id`` does not exist.

    Returns:
        True when the order exists.
    """
    not_found = response.http_status == HTTP_NOT_FOUND or (
        response.is_error and NOT_FOUND_MARKER in response.message_text.lower()
    )
    if not_found:
        logger.info(
            f"Order {order_id} not found",
            extra={"order_id": order_id, "http_status": response.http_status},
        )
        raise OrderNotFound(order_id)
    return True


__all__ = ["check_post_response", "was_order_found"]
