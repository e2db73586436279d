from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from boutique_pos.money import to_money


# Maximum price: $9,999,999.99
# This prevents nonsensical prices from reaching the catalog
MAX_PRICE = to_money("9999999.99")


class ValidationError(ValueError):
    """Input problem in a service payload."""


@dataclass(frozen=True)
class FieldPolicy:
    """
    Central policy layer:
    - writable_fields: field name -> kind ("str", "text", "money", "count", "optional_str")
    - required_on_create: fields required when creating a record
    """
    writable_fields: dict[str, str]
    required_on_create: frozenset[str] = frozenset()


PRODUCT_POLICY = FieldPolicy(
    writable_fields={
        "name": "str",
        "description": "text",
        "price": "money",
        "stock": "count",
        "category": "text",
        "barcode": "optional_str",
        "image_url": "optional_str",
    },
    required_on_create=frozenset({"name", "price"}),
)

CATEGORY_POLICY = FieldPolicy(
    writable_fields={"name": "str"},
    required_on_create=frozenset({"name"}),
)


def _coerce_count(key: str, value: Any) -> int:
    # Already an int (but not bool which is a subclass of int)
    if isinstance(value, int) and not isinstance(value, bool):
        result = value
    elif isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            raise ValidationError(f"{key} must be an integer")
        # Reject scientific notation (e.g., "1e15", "1E10")
        if 'e' in stripped.lower():
            raise ValidationError(f"{key} must be a plain integer (scientific notation not allowed)")
        # Reject decimal points (e.g., "12.5")
        if '.' in stripped:
            raise ValidationError(f"{key} must be an integer (no decimals)")
        try:
            result = int(stripped)
        except ValueError:
            raise ValidationError(f"{key} must be an integer")
    elif isinstance(value, float):
        raise ValidationError(f"{key} must be an integer, not a decimal")
    else:
        raise ValidationError(f"{key} must be an integer")

    if result < 0:
        raise ValidationError(f"{key} cannot be negative")
    return result


def _coerce_value(key: str, kind: str, value: Any):
    if kind == "count":
        if value is None:
            raise ValidationError(f"{key} is required")
        return _coerce_count(key, value)

    if kind == "money":
        if value is None:
            raise ValidationError(f"{key} is required")
        try:
            amount = to_money(value)
        except ValueError:
            raise ValidationError(f"{key} must be a decimal amount")
        if amount < 0:
            raise ValidationError(f"{key} cannot be negative")
        if amount > MAX_PRICE:
            raise ValidationError(f"{key} exceeds maximum allowed ({MAX_PRICE})")
        return amount

    if kind == "optional_str":
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    if value is None:
        if kind == "text":
            return ""
        raise ValidationError(f"{key} is required")

    text = str(value).strip()
    if kind == "str" and not text:
        raise ValidationError(f"{key} cannot be empty")
    return text


def validate_payload(*, payload: dict, policy: FieldPolicy, partial: bool) -> dict:
    """
    Validates + normalizes an incoming payload against a field policy.
    Returns a cleaned patch dict with only writable fields.

    partial=False: create semantics (enforce required_on_create)
    partial=True: update semantics (only validate provided fields)
    """
    if not isinstance(payload, dict):
        raise ValidationError("payload must be a mapping")

    unknown = sorted(set(payload) - set(policy.writable_fields))
    if unknown:
        raise ValidationError(f"Unknown or read-only fields: {', '.join(unknown)}")

    if not partial:
        missing = sorted(k for k in policy.required_on_create if payload.get(k) is None)
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    cleaned: dict[str, Any] = {}
    for key, value in payload.items():
        cleaned[key] = _coerce_value(key, policy.writable_fields[key], value)
    return cleaned
