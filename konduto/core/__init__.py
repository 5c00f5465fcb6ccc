"""Core domain logic for the Konduto SDK.

This package contains zero external dependencies: order models, field
validation, the error taxonomy, port interfaces and the order service.
The HTTP transport lives in the adapters package.
"""

from .exceptions import (
    AuthenticationError,
    InvalidAPIKey,
    InvalidOrder,
    InvalidVersion,
    KondutoHTTPError,
    KondutoSDKError,
    OrderNotFound,
    SDKProtocolError,
    ServerError,
)
from .models import (
    AVAILABLE_VERSIONS,
    CURRENT_VERSION,
    Address,
    ApiCredentials,
    ApiResponse,
    Customer,
    Order,
    Payment,
    Recommendation,
    ShoppingItem,
    ValidationResult,
)
from .validation import ValidationSchema

__all__ = [
    "AVAILABLE_VERSIONS",
    "CURRENT_VERSION",
    "Address",
    "ApiCredentials",
    "ApiResponse",
    "AuthenticationError",
    "Customer",
    "InvalidAPIKey",
    "InvalidOrder",
    "InvalidVersion",
    "KondutoHTTPError",
    "KondutoSDKError",
    "Order",
    "OrderNotFound",
    "Payment",
    "Recommendation",
    "SDKProtocolError",
    "ServerError",
    "ShoppingItem",
    "ValidationResult",
    "ValidationSchema",
]
