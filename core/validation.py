"""Input validators shared by the stores.

Each helper returns the cleaned value or raises `InvalidInput` with a
message naming the field.
"""
from __future__ import annotations

from typing import Any, Iterable

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import validate_email

from .errors import InvalidInput


def parse_id(value: Any, label: str) -> int:
    """Return `value` as a primary key, or fail before touching storage."""
    if isinstance(value, bool):
        raise InvalidInput(f"Invalid {label} ID")
    if isinstance(value, int):
        if value > 0:
            return value
        raise InvalidInput(f"Invalid {label} ID")
    if isinstance(value, str) and value.isascii() and value.isdigit():
        pk = int(value)
        if pk > 0:
            return pk
    raise InvalidInput(f"Invalid {label} ID")


def parse_ids(values: Iterable[Any], label: str) -> list[int]:
    if isinstance(values, (str, bytes)) or not hasattr(values, "__iter__"):
        raise InvalidInput(f"{label} must be a list")
    return [parse_id(v, label) for v in values]


def validate_string(value: Any, label: str, min_length: int = 1, max_length: int = 1000) -> str:
    if value is None:
        raise InvalidInput(f"{label} is required")
    if not isinstance(value, str):
        raise InvalidInput(f"{label} must be a string")
    trimmed = value.strip()
    if len(trimmed) < min_length:
        raise InvalidInput(f"{label} must be at least {min_length} character(s)")
    if len(trimmed) > max_length:
        raise InvalidInput(f"{label} must not exceed {max_length} characters")
    return trimmed


def validate_bool(value: Any, label: str) -> bool:
    if not isinstance(value, bool):
        raise InvalidInput(f"{label} must be a boolean")
    return value


def validate_int_range(value: Any, label: str, low: int, high: int) -> int:
    if isinstance(value, bool):
        raise InvalidInput(f"{label} must be a valid number")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise InvalidInput(f"{label} must be a valid number") from None
    if isinstance(value, float) and value != number:
        raise InvalidInput(f"{label} must be a whole number")
    if number < low or number > high:
        raise InvalidInput(f"{label} must be between {low} and {high}")
    return number


def normalize_email(value: Any) -> str:
    """Lowercase an address and check it belongs to the campus domain."""
    email = validate_string(value, "Email", 3, 254).lower()
    try:
        validate_email(email)
    except ValidationError:
        raise InvalidInput("Email is not a valid address") from None
    domain = settings.COURSEHUB_EMAIL_DOMAIN.lower()
    if not email.endswith(f"@{domain}"):
        raise InvalidInput(f"Email must be a valid @{domain} address")
    return email


def check_update_keys(updates: Any, allowed: Iterable[str]) -> dict:
    """Reject empty updates and keys outside the allow-list."""
    if not isinstance(updates, dict) or not updates:
        raise InvalidInput("No updates provided")
    allowed = set(allowed)
    for key in updates:
        if key not in allowed:
            raise InvalidInput(f"Cannot update field: {key}")
    return updates
