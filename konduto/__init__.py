"""Konduto fraud-analysis SDK.

Builds authenticated requests for commerce orders, submits them to the
Konduto API for risk analysis and parses the replies into Order objects.
"""

from konduto.client import Konduto
from konduto.core.exceptions import (
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
from konduto.core.models import (
    Address,
    Customer,
    Order,
    Payment,
    Recommendation,
    ShoppingItem,
)

__version__ = "2.0.0"

__all__ = [
    "Address",
    "AuthenticationError",
    "Customer",
    "InvalidAPIKey",
    "InvalidOrder",
    "InvalidVersion",
    "Konduto",
    "KondutoHTTPError",
    "KondutoSDKError",
    "Order",
    "OrderNotFound",
    "Payment",
    "Recommendation",
    "SDKProtocolError",
    "ServerError",
    "ShoppingItem",
]
