"""
Field rules for inventory items.

One rule set serves both the interactive pre-check (``validate_field``) and
the authoritative check the item service runs before every write. Input is a
loosely typed mapping keyed by the public field names (``unitPrice`` and so
on); values may arrive as text.
"""
import math
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional

from app.core.constants import (
    CATEGORY_MAX_LENGTH,
    ITEM_STATUSES,
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    NOTE_MAX_LENGTH,
    PRICE_MAX_DECIMALS,
    QUANTITY_MAX,
    SKU_MAX_LENGTH,
    SKU_MIN_LENGTH,
    SUPPLIER_MAX_LENGTH,
)

SKU_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    return str(value).strip()


def _is_blank(value: Any) -> bool:
    return _text(value) == ""


def _source_text(value: Any) -> str:
    # repr keeps the shortest round-trip form of a float (9.99, not 9.9900000001)
    if isinstance(value, float):
        return repr(value)
    return _text(value)


def to_decimal(value: Any) -> Optional[Decimal]:
    """Parse ``value`` as a number that is finite as a float too, or return None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float, str, Decimal)):
        text = _source_text(value)
        if "_" in text:
            return None
        try:
            number = Decimal(text)
        except InvalidOperation:
            return None
        if not number.is_finite() or not math.isfinite(float(number)):
            return None
        return number
    return None


def _check_sku(value: Any) -> Optional[str]:
    if _is_blank(value):
        return "SKU is required"
    sku = _text(value)
    if len(sku) < SKU_MIN_LENGTH or len(sku) > SKU_MAX_LENGTH:
        return "SKU must be between {} and {} characters".format(SKU_MIN_LENGTH, SKU_MAX_LENGTH)
    if not SKU_PATTERN.match(sku):
        return "SKU can only contain letters, numbers, hyphen (-) and underscore (_)"
    return None


def _check_name(value: Any) -> Optional[str]:
    if _is_blank(value):
        return "Name is required"
    name = _text(value)
    if len(name) < NAME_MIN_LENGTH or len(name) > NAME_MAX_LENGTH:
        return "Name must be between {} and {} characters".format(NAME_MIN_LENGTH, NAME_MAX_LENGTH)
    return None


def _check_max_length(label: str, limit: int):
    def check(value: Any) -> Optional[str]:
        if len(_text(value)) > limit:
            return "{} must be at most {} characters".format(label, limit)
        return None

    return check


def _check_quantity(value: Any) -> Optional[str]:
    if _is_blank(value):
        return "Quantity is required"
    quantity = to_decimal(value)
    if quantity is None or quantity != quantity.to_integral_value():
        return "Quantity must be an integer"
    if quantity < 0:
        return "Quantity must be >= 0"
    if quantity > QUANTITY_MAX:
        return "Quantity must be <= {}".format(QUANTITY_MAX)
    return None


def _check_unit_price(value: Any) -> Optional[str]:
    if _is_blank(value):
        return "Unit Price is required"
    price = to_decimal(value)
    if price is None:
        return "Unit Price must be a number"
    if price < 0:
        return "Unit Price must be >= 0"
    _, _, fraction = _source_text(value).partition(".")
    if len(fraction) > PRICE_MAX_DECIMALS:
        return "Unit Price can have at most {} decimal places".format(PRICE_MAX_DECIMALS)
    return None


def _check_status(value: Any) -> Optional[str]:
    if _is_blank(value):
        return "Status is required"
    if value not in ITEM_STATUSES:
        return 'Status must be "active" or "inactive"'
    return None


_FIELD_CHECKS = {
    "sku": _check_sku,
    "name": _check_name,
    "category": _check_max_length("Category", CATEGORY_MAX_LENGTH),
    "quantity": _check_quantity,
    "unitPrice": _check_unit_price,
    "supplier": _check_max_length("Supplier", SUPPLIER_MAX_LENGTH),
    "status": _check_status,
    "note": _check_max_length("Note", NOTE_MAX_LENGTH),
}


def validate_item(candidate: Mapping[str, Any], is_update: bool = False) -> dict[str, str]:
    """
    Check every field of ``candidate`` and collect all violations.

    Args:
        candidate: Field bag keyed by public field name.
        is_update: Accepted for call-site symmetry; create and update are
            held to the same rules.

    Returns:
        Mapping of field name to message. Empty means the item is valid.
    """
    errors: dict[str, str] = {}
    for field, check in _FIELD_CHECKS.items():
        message = check(candidate.get(field))
        if message:
            errors[field] = message
    return errors


def is_valid_item(candidate: Mapping[str, Any]) -> bool:
    return not validate_item(candidate)


def validate_field(name: str, value: Any, rest: Optional[Mapping[str, Any]] = None) -> Optional[str]:
    """Validate one field in the context of the rest of the form."""
    data = dict(rest or {})
    data[name] = value
    return validate_item(data).get(name)


def coerce_item(candidate: Mapping[str, Any]) -> dict[str, Any]:
    """
    Convert an already validated field bag into column values.

    Text is trimmed, blank optional fields become None, quantity becomes an
    int and unit price a float.
    """

    def optional(field: str) -> Optional[str]:
        return _text(candidate.get(field)) or None

    return {
        "sku": _text(candidate.get("sku")),
        "name": _text(candidate.get("name")),
        "category": optional("category"),
        "quantity": int(to_decimal(candidate.get("quantity"))),
        "unit_price": float(to_decimal(candidate.get("unitPrice"))),
        "supplier": optional("supplier"),
        "status": candidate.get("status"),
        "note": optional("note"),
    }


__all__ = [
    "SKU_PATTERN",
    "coerce_item",
    "is_valid_item",
    "to_decimal",
    "validate_field",
    "validate_item",
]
