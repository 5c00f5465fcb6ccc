"""Domain models for the Konduto SDK.

All models in this module use only Python standard library types so the
core package stays free of HTTP and serialization dependencies.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar

from .exceptions import InvalidAPIKey, InvalidVersion
from .validation import ORDER_STATUSES, ValidationSchema

logger = logging.getLogger(__name__)

AVAILABLE_VERSIONS: tuple[str, ...] = ("v1",)
CURRENT_VERSION = "v1"
DEFAULT_BASE_URL = "https://api.konduto.com"

API_KEY_LENGTH = 21
API_KEY_PREFIXES = ("T", "P")


def is_valid_api_key(key: Any) -> bool:
    """Check the 21-character key format, first character T or P."""
    return (
        isinstance(key, str)
        and len(key) == API_KEY_LENGTH
        and key[0] in API_KEY_PREFIXES
    )


@dataclass(frozen=True)
class ApiCredentials:
    """API key and version used to authenticate and route requests.

    Instances are immutable; configuration changes build a new value so a
    key/version pair is always read consistently.
    """

    api_key: str
    version: str = CURRENT_VERSION
    base_url: str = DEFAULT_BASE_URL

    def __post_init__(self) -> None:
        """Reject malformed keys and unsupported versions on creation."""
        if not is_valid_api_key(self.api_key):
            raise InvalidAPIKey(self.api_key)
        if self.version not in AVAILABLE_VERSIONS:
            raise InvalidVersion(self.version)

    @property
    def endpoint(self) -> str:
        return f"{self.base_url.rstrip('/')}/{self.version}"

    @property
    def is_production(self) -> bool:
        return self.api_key.startswith("P")


class Recommendation(str, Enum):
    """Risk verdict returned after an order is analyzed."""

    APPROVE = "approve"
    REVIEW = "review"
    DECLINE = "decline"
    NONE = "none"

    @classmethod
    def parse(cls, value: Any) -> "Recommendation | None":
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.lower())
        except ValueError:
            return None


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating an entity: success, or field-level errors."""

    errors: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    def __bool__(self) -> bool:
        return self.ok


# ----------------------------------------------------------------------------
# Order parts
# ----------------------------------------------------------------------------


class _Entity:
    """Shared (de)serialization for the flat order parts."""

    ENTITY_KIND: ClassVar[str] = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Any:
        names = {f.name for f in fields(cls)}  # type: ignore[arg-type]
        return cls(**{k: v for k, v in data.items() if k in names})

    def to_dict(self) -> dict[str, Any]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)  # type: ignore[arg-type]
            if getattr(self, f.name) is not None
        }

    def validate(self, prefix: str | None = None) -> list[str]:
        """Return error messages for missing or malformed fields."""
        label = prefix or self.ENTITY_KIND
        data = self.to_dict()
        errors = [
            f"{label}.{name}: required"
            for name in ValidationSchema.required_fields(self.ENTITY_KIND)
            if name not in data
        ]
        for name, value in data.items():
            if not ValidationSchema.validate_field(self.ENTITY_KIND, name, value):
                errors.append(
                    f"{label}.{name}: {ValidationSchema.explain(self.ENTITY_KIND, name)}"
                )
        return errors


@dataclass(frozen=True)
class Customer(_Entity):
    """The buyer placing the order."""

    ENTITY_KIND: ClassVar[str] = "customer"

    id: str | None = None
    name: str | None = None
    email: str | None = None
    tax_id: str | None = None
    phone1: str | None = None
    phone2: str | None = None
    dob: str | None = None
    new: bool | None = None
    vip: bool | None = None
    created_at: str | None = None


@dataclass(frozen=True)
class Address(_Entity):
    """Billing or shipping address."""

    ENTITY_KIND: ClassVar[str] = "address"

    name: str | None = None
    address1: str | None = None
    address2: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    country: str | None = None


@dataclass(frozen=True)
class Payment(_Entity):
    """A payment method used for the order."""

    ENTITY_KIND: ClassVar[str] = "payment"

    type: str | None = None
    status: str | None = None
    bin: str | None = None
    last4: str | None = None
    expiration_date: str | None = None


@dataclass(frozen=True)
class ShoppingItem(_Entity):
    """A line of the shopping cart."""

    ENTITY_KIND: ClassVar[str] = "item"

    sku: str | None = None
    product_code: str | None = None
    category: int | None = None
    name: str | None = None
    description: str | None = None
    unit_cost: float | None = None
    quantity: int | None = None
    discount: float | None = None
    created_at: str | None = None


# ----------------------------------------------------------------------------
# Order
# ----------------------------------------------------------------------------


def _format_timestamp(value: datetime | str | None) -> str | None:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.strftime("%Y-%m-%dT%H:%M:%SZ")
    return value


def _as_entity(cls: type, value: Any) -> Any:
    if value is None or isinstance(value, cls):
        return value
    if isinstance(value, Mapping):
        return cls.from_dict(value)
    raise TypeError(f"Cannot build {cls.__name__} from {type(value).__name__}")


def _as_entities(cls: type, values: Any) -> list[Any]:
    if values is None:
        return []
    if isinstance(values, Mapping):
        values = [values]
    return [_as_entity(cls, value) for value in values]


def _read_only(value: Any) -> Mapping[str, Any] | None:
    if value is None:
        return None
    return MappingProxyType(dict(value))


@dataclass
class Order:
    """A commerce order submitted to Konduto for risk analysis.

    The caller owns the object. Fields under "set by the service" are
    populated from API responses after analysis or retrieval.

    Lifecycle:
        unsent -> sent (not analyzed) -> analyzed (recommendation set)
        -> status-updated
    """

    AVAILABLE_STATUS: ClassVar[tuple[str, ...]] = ORDER_STATUSES
    ENTITY_KIND: ClassVar[str] = "order"

    id: str | int | None = None
    total_amount: float | None = None
    visitor: str | None = None
    shipping_amount: float | None = None
    tax_amount: float | None = None
    currency: str | None = None
    installments: int | None = None
    ip: str | None = None
    purchased_at: datetime | str | None = None
    first_message: str | None = None
    messages_exchanged: int | None = None
    customer: Customer | None = None
    payment: list[Payment] = field(default_factory=list)
    billing: Address | None = None
    shipping: Address | None = None
    shopping_cart: list[ShoppingItem] = field(default_factory=list)

    # Set by the service
    status: str | None = None
    recommendation: Recommendation | None = None
    score: float | None = None
    geolocation: Mapping[str, Any] | None = None
    device: Mapping[str, Any] | None = None
    navigation: Mapping[str, Any] | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    _REQUEST_FIELDS: ClassVar[tuple[str, ...]] = (
        "id",
        "visitor",
        "total_amount",
        "shipping_amount",
        "tax_amount",
        "currency",
        "installments",
        "ip",
        "purchased_at",
        "first_message",
        "messages_exchanged",
    )

    def __post_init__(self) -> None:
        """Normalize nested parts given as plain mappings."""
        self.customer = _as_entity(Customer, self.customer)
        self.billing = _as_entity(Address, self.billing)
        self.shipping = _as_entity(Address, self.shipping)
        self.payment = _as_entities(Payment, self.payment)
        self.shopping_cart = _as_entities(ShoppingItem, self.shopping_cart)
        raw_recommendation = self.recommendation
        self.recommendation = Recommendation.parse(raw_recommendation)
        if self.recommendation is None and raw_recommendation is not None:
            logger.warning(
                f"Unknown recommendation {raw_recommendation!r} for order {self.id}",
                extra={"order_id": self.id, "recommendation": raw_recommendation},
            )
            self.extra["recommendation"] = raw_recommendation
        self.geolocation = _read_only(self.geolocation)
        self.device = _read_only(self.device)
        self.navigation = _read_only(self.navigation)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Order":
        """Build an order from a mapping such as the API's "order" object.

        Keys that are not order fields are kept in ``extra``.
        """
        names = {f.name for f in fields(cls)} - {"extra"}
        known = {k: v for k, v in data.items() if k in names}
        extra = {k: v for k, v in data.items() if k not in names}
        return cls(**known, extra=extra)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the fields sent when submitting the order."""
        data: dict[str, Any] = {}
        for name in self._REQUEST_FIELDS:
            value = getattr(self, name)
            if name == "purchased_at":
                value = _format_timestamp(value)
            if value is not None:
                data[name] = value
        if self.customer is not None:
            data["customer"] = self.customer.to_dict()
        if self.payment:
            data["payment"] = [p.to_dict() for p in self.payment]
        if self.billing is not None:
            data["billing"] = self.billing.to_dict()
        if self.shipping is not None:
            data["shipping"] = self.shipping.to_dict()
        if self.shopping_cart:
            data["shopping_cart"] = [item.to_dict() for item in self.shopping_cart]
        return data

    def validate(self) -> ValidationResult:
        """Check every field the API requires and every populated field."""
        data = self.to_dict()
        errors: list[str] = []

        for name in ValidationSchema.required_fields(self.ENTITY_KIND):
            if name not in data:
                errors.append(f"order.{name}: required")
        for name in self._REQUEST_FIELDS:
            if name in data and not ValidationSchema.validate_field(
                self.ENTITY_KIND, name, data[name]
            ):
                errors.append(
                    f"order.{name}: {ValidationSchema.explain(self.ENTITY_KIND, name)}"
                )

        if self.customer is None:
            errors.append("order.customer: required")
        else:
            errors.extend(self.customer.validate())
        for index, payment in enumerate(self.payment):
            errors.extend(payment.validate(f"payment[{index}]"))
        if self.billing is not None:
            errors.extend(self.billing.validate("billing"))
        if self.shipping is not None:
            errors.extend(self.shipping.validate("shipping"))
        for index, item in enumerate(self.shopping_cart):
            errors.extend(item.validate(f"shopping_cart[{index}]"))

        return ValidationResult(errors=tuple(errors))

    def is_valid(self) -> bool:
        return self.validate().ok

    def get_errors(self) -> list[str]:
        return list(self.validate().errors)

    def merged(self, data: Mapping[str, Any]) -> "Order":
        """Return a copy of this order with the fields in ``data`` applied.

        The original order is left untouched.
        """
        names = {f.name for f in fields(self)} - {"extra"}
        current = {f.name: getattr(self, f.name) for f in fields(self)}
        current["payment"] = list(self.payment)
        current["shopping_cart"] = list(self.shopping_cart)
        current["extra"] = {**self.extra, **{k: v for k, v in data.items() if k not in names}}
        current.update({k: v for k, v in data.items() if k in names})
        return Order(**current)

    def update_from(self, data: Mapping[str, Any]) -> None:
        """Overwrite this order in place with the fields in ``data``."""
        updated = self.merged(data)
        for f in fields(self):
            setattr(self, f.name, getattr(updated, f.name))


@dataclass(frozen=True)
class ApiResponse:
    """A decoded Konduto API response.

    ``status`` is the top-level status reported in the body ("ok" or
    "error"); ``http_status`` is the HTTP status code of the reply.
    """

    http_status: int
    status: str
    order: Mapping[str, Any] | None = None
    message: Any = None
    body: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Convert mappings to read-only proxies."""
        if self.order is not None and not isinstance(self.order, MappingProxyType):
            object.__setattr__(self, "order", MappingProxyType(dict(self.order)))
        if not isinstance(self.body, MappingProxyType):
            object.__setattr__(self, "body", MappingProxyType(dict(self.body)))

    @property
    def is_ok(self) -> bool:
        return self.status == "ok"

    @property
    def is_error(self) -> bool:
        return self.status == "error"

    @property
    def message_text(self) -> str:
        """Flatten the error message, which may be a string or a mapping."""
        if self.message is None:
            return ""
        if isinstance(self.message, str):
            return self.message
        if isinstance(self.message, Mapping):
            return " ".join(str(v) for v in self.message.values())
        return str(self.message)
