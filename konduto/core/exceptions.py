"""Error taxonomy for the Konduto SDK.

Local validation errors (API key, version, order data) are raised before
any network call. Remote failures are translated into OrderNotFound,
SDKProtocolError or one of the KondutoHTTPError subclasses. Transport
errors from httpx are not wrapped and reach the caller unchanged.
"""

from collections.abc import Mapping, Sequence
from typing import Any


class KondutoSDKError(Exception):
    """Base class for every error raised by the SDK."""


class InvalidAPIKey(KondutoSDKError):
    """The API key does not match the 21-character T/P format."""

    def __init__(self, key: Any):
        self.key = key
        super().__init__(f"Invalid API key: {_mask_key(key)}")


class InvalidVersion(KondutoSDKError):
    """The requested API version is not supported."""

    def __init__(self, version: Any):
        self.version = version
        super().__init__(f"Invalid API version: {version!r}")


class InvalidOrder(KondutoSDKError):
    """Order data was rejected locally before being sent.

    Carries either the name of the offending field ("id", "status") or
    the list of error messages produced by the order's own validation.
    """

    def __init__(self, field_or_errors: str | Sequence[str]):
        if isinstance(field_or_errors, str):
            self.field: str | None = field_or_errors
            self.errors: tuple[str, ...] = (field_or_errors,)
            message = f"Invalid order field: {field_or_errors}"
        else:
            self.field = None
            self.errors = tuple(field_or_errors)
            message = "Invalid order: " + "; ".join(self.errors)
        super().__init__(message)


class OrderNotFound(KondutoSDKError):
    """The remote service reports that the order does not exist."""

    def __init__(self, order_id: str | int):
        self.order_id = order_id
        super().__init__(f"Order not found: {order_id}")


class SDKProtocolError(KondutoSDKError):
    """A response did not have the shape the calling operation requires."""

    def __init__(self, message: str, response: Mapping[str, Any] | None = None):
        self.response = response
        super().__init__(message)


class KondutoHTTPError(KondutoSDKError):
    """The service answered with an HTTP status the SDK cannot recover from."""

    def __init__(self, status_code: int, message: str = ""):
        self.status_code = status_code
        super().__init__(message or f"Konduto API returned HTTP {status_code}")


class AuthenticationError(KondutoHTTPError):
    """The API key was refused (HTTP 401 or 403)."""


class ServerError(KondutoHTTPError):
    """The service failed to process the request (HTTP 5xx)."""


def _mask_key(key: Any) -> str:
    if not isinstance(key, str):
        return repr(key)
    if len(key) <= 4:
        return "*" * len(key)
    return key[:1] + "*" * (len(key) - 4) + key[-3:]


__all__ = [
    "AuthenticationError",
    "InvalidAPIKey",
    "InvalidOrder",
    "InvalidVersion",
    "KondutoHTTPError",
    "KondutoSDKError",
    "OrderNotFound",
    "SDKProtocolError",
    "ServerError",
]
