"""Field validation rules for data sent to the Konduto API.

Rules are keyed by entity kind ("order", "customer", "payment", "address",
"item") and field name. Each rule is a pure predicate over the raw value;
pairs without a rule are accepted.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

ORDER_STATUSES = ("approved", "declined", "fraud", "canceled", "not_authorized")
PAYMENT_TYPES = ("credit", "boleto", "debit", "transfer", "voucher")
PAYMENT_STATUSES = ("approved", "declined", "pending")

_ID_PATTERN = re.compile(r"^[A-Za-z0-9_.\-]{1,100}$")
_VISITOR_PATTERN = re.compile(r"^[A-Za-z0-9]{1,40}$")
_CURRENCY_PATTERN = re.compile(r"^[A-Z]{3}$")
_COUNTRY_PATTERN = re.compile(r"^[A-Z]{2}$")
_IPV4_PATTERN = re.compile(r"^(\d{1,3})\.(\d{1,3})\.(\d{1,3})\.(\d{1,3})$")
_DATETIME_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z$")
_DATE_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])-(0[1-9]|[12]\d|3[01])$")
_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_BIN_PATTERN = re.compile(r"^\d{6}$")
_LAST4_PATTERN = re.compile(r"^\d{4}$")
_EXPIRATION_PATTERN = re.compile(r"^(0[1-9]|1[0-2])\d{4}$")

Predicate = Callable[[Any], bool]


@dataclass(frozen=True)
class FieldRule:
    """Validity predicate for a single field."""

    check: Predicate
    required: bool = False
    reason: str = "invalid value"

    def __call__(self, value: Any) -> bool:
        try:
            return bool(self.check(value))
        except (TypeError, ValueError):
            return False


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _non_negative(value: Any) -> bool:
    return _is_number(value) and value >= 0


def _positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _text(max_length: int) -> Predicate:
    def check(value: Any) -> bool:
        return isinstance(value, str) and 0 < len(value) <= max_length

    return check


def _matches(pattern: re.Pattern[str]) -> Predicate:
    def check(value: Any) -> bool:
        return isinstance(value, str) and pattern.match(value) is not None

    return check


def _one_of(choices: tuple[str, ...]) -> Predicate:
    def check(value: Any) -> bool:
        return value in choices

    return check


def _is_order_id(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return value >= 0
    return isinstance(value, str) and _ID_PATTERN.match(value) is not None


def _is_ipv4(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    match = _IPV4_PATTERN.match(value)
    return match is not None and all(int(octet) <= 255 for octet in match.groups())


def _is_category(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 100 <= value <= 9999


SCHEMA: dict[str, dict[str, FieldRule]] = {
    "order": {
        "id": FieldRule(_is_order_id, required=True, reason="expected 1-100 characters of [A-Za-z0-9_.-]"),
        "visitor": FieldRule(_matches(_VISITOR_PATTERN), reason="expected up to 40 alphanumeric characters"),
        "total_amount": FieldRule(_non_negative, required=True, reason="expected a non-negative number"),
        "shipping_amount": FieldRule(_non_negative, reason="expected a non-negative number"),
        "tax_amount": FieldRule(_non_negative, reason="expected a non-negative number"),
        "currency": FieldRule(_matches(_CURRENCY_PATTERN), reason="expected a 3-letter currency code"),
        "installments": FieldRule(_positive_int, reason="expected a positive integer"),
        "ip": FieldRule(_is_ipv4, reason="expected an IPv4 address"),
        "purchased_at": FieldRule(_matches(_DATETIME_PATTERN), reason="expected YYYY-MM-DDTHH:MM:SSZ"),
        "status": FieldRule(_one_of(ORDER_STATUSES), reason="expected one of " + ", ".join(ORDER_STATUSES)),
    },
    "customer": {
        "id": FieldRule(_text(100), required=True, reason="expected up to 100 characters"),
        "name": FieldRule(_text(100), required=True, reason="expected up to 100 characters"),
        "email": FieldRule(
            lambda v: _text(100)(v) and _EMAIL_PATTERN.match(v) is not None,
            required=True,
            reason="expected a valid e-mail address",
        ),
        "tax_id": FieldRule(_text(100), reason="expected up to 100 characters"),
        "phone1": FieldRule(_text(100), reason="expected up to 100 characters"),
        "phone2": FieldRule(_text(100), reason="expected up to 100 characters"),
        "dob": FieldRule(_matches(_DATE_PATTERN), reason="expected YYYY-MM-DD"),
        "new": FieldRule(lambda v: isinstance(v, bool), reason="expected a boolean"),
        "vip": FieldRule(lambda v: isinstance(v, bool), reason="expected a boolean"),
    },
    "payment": {
        "type": FieldRule(_one_of(PAYMENT_TYPES), required=True, reason="expected one of " + ", ".join(PAYMENT_TYPES)),
        "bin": FieldRule(_matches(_BIN_PATTERN), reason="expected 6 digits"),
        "last4": FieldRule(_matches(_LAST4_PATTERN), reason="expected 4 digits"),
        "expiration_date": FieldRule(_matches(_EXPIRATION_PATTERN), reason="expected MMYYYY"),
        "status": FieldRule(_one_of(PAYMENT_STATUSES), reason="expected one of " + ", ".join(PAYMENT_STATUSES)),
    },
    "address": {
        "name": FieldRule(_text(100), reason="expected up to 100 characters"),
        "address1": FieldRule(_text(100), reason="expected up to 100 characters"),
        "address2": FieldRule(_text(100), reason="expected up to 100 characters"),
        "city": FieldRule(_text(100), reason="expected up to 100 characters"),
        "state": FieldRule(_text(100), reason="expected up to 100 characters"),
        "zip": FieldRule(_text(100), reason="expected up to 100 characters"),
        "country": FieldRule(_matches(_COUNTRY_PATTERN), reason="expected a 2-letter country code"),
    },
    "item": {
        "sku": FieldRule(_text(100), reason="expected up to 100 characters"),
        "product_code": FieldRule(_text(100), reason="expected up to 100 characters"),
        "category": FieldRule(_is_category, reason="expected an integer between 100 and 9999"),
        "name": FieldRule(_text(100), reason="expected up to 100 characters"),
        "description": FieldRule(_text(600), reason="expected up to 600 characters"),
        "unit_cost": FieldRule(_non_negative, reason="expected a non-negative number"),
        "quantity": FieldRule(_positive_int, reason="expected a positive integer"),
        "discount": FieldRule(_non_negative, reason="expected a non-negative number"),
    },
}


class ValidationSchema:
    """Lookup and evaluation of the field rules in SCHEMA."""

    @staticmethod
    def get_rule(entity_kind: str, field_name: str) -> FieldRule | None:
        return SCHEMA.get(entity_kind, {}).get(field_name)

    @staticmethod
    def validate_field(entity_kind: str, field_name: str, value: Any) -> bool:
        """Check a raw value against the rule for (entity_kind, field_name).

        Args:
            entity_kind: Entity the field belongs to, e.g. "order".
            field_name: Field name as sent on the wire, e.g. "id".
            value: Raw value to check.

        Returns:
            True if the value is acceptable or no rule exists for the pair,
            False otherwise. Never raises.
        """
        rule = ValidationSchema.get_rule(entity_kind, field_name)
        if rule is None:
            return True
        return rule(value)

    @staticmethod
    def required_fields(entity_kind: str) -> tuple[str, ...]:
        """Names of the fields the API requires for an entity kind."""
        rules = SCHEMA.get(entity_kind, {})
        return tuple(name for name, rule in rules.items() if rule.required)

    @staticmethod
    def explain(entity_kind: str, field_name: str) -> str:
        rule = ValidationSchema.get_rule(entity_kind, field_name)
        return rule.reason if rule is not None else ""


__all__ = [
    "FieldRule",
    "ORDER_STATUSES",
    "PAYMENT_STATUSES",
    "PAYMENT_TYPES",
    "SCHEMA",
    "ValidationSchema",
]
