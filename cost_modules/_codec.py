"""
Shared record codec helpers for ``cost_modules`` models.

Persisted records are plain JSON-compatible dicts: ``Decimal`` values are
written as strings, dates and datetimes as ISO-8601 strings.  These helpers
do the conversions in both directions and are used by every model's
``to_dict`` / ``from_dict`` pair.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any


def to_decimal(value: Any) -> Decimal:
    """
    Coerce a persisted or user-supplied number to ``Decimal``.

    Floats go through ``str`` so that ``0.1`` becomes ``Decimal("0.1")``.

    Raises:
        ValueError: if ``value`` is not numeric or is not finite
            (``Infinity``, ``NaN``, ``sNaN``).
    """
    if isinstance(value, bool):
        raise ValueError(f"Cannot convert boolean {value!r} to Decimal")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValueError(f"Cannot convert {value!r} to Decimal") from None
    if not result.is_finite():
        raise ValueError(f"Non-finite number {value!r} is not allowed")
    return result


def require_finite(name: str, value: Decimal | None) -> None:
    """Raise ``ValueError`` when a model field holds Infinity or NaN."""
    if value is not None and not value.is_finite():
        raise ValueError(f"{name} must be a finite number, got {value}")


def optional_decimal(value: Any) -> Decimal | None:
    if value is None or value == "":
        return None
    return to_decimal(value)


def decimal_str(value: Decimal | None) -> str | None:
    return None if value is None else str(value)


def parse_date(value: Any) -> date:
    """
    Parse a date from a record (string, date or datetime).

    Raises:
        ValueError: if ``value`` is not a valid date representation.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value[:10])
    raise ValueError(f"Cannot parse date from {value!r}")


def optional_date(value: Any) -> date | None:
    if value is None or value == "":
        return None
    return parse_date(value)


def parse_datetime(value: Any) -> datetime:
    """Parse an ISO-8601 datetime (or pass a datetime through)."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return datetime.fromisoformat(value)
    raise ValueError(f"Cannot parse datetime from {value!r}")
