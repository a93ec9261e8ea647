# storefront/core/coerce.py
"""
Lenient coercion helpers for untrusted JSON.

Request bodies and browser storage come from clients we do not control,
so values are coerced the way a browser would read them: numeric strings
count as numbers, `null` counts as zero, anything else is not a number.
"""
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Mapping

MAX_QUANTITY = 25
MIN_QUANTITY = 1


def to_number(value: Any) -> float:
    """
    Convert a JSON value to a float, returning NaN when it is not numeric.

      - bool   -> 1.0 / 0.0
      - None   -> 0.0
      - ""     -> 0.0 (after strip)
      - "12.5" -> 12.5
      - ints beyond float range -> +/-inf
    """
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if value is None:
        return 0.0
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        if "_" in text:
            return math.nan
        try:
            return float(text)
        except ValueError:
            return math.nan
    return math.nan


def first_present(mapping: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first value under `keys` that is present and not None."""
    for key in keys:
        value = mapping.get(key)
        if value is not None:
            return value
    return default


def positive_int(value: Any) -> int | None:
    """Coerce to a strictly positive integer, or None."""
    number = to_number(value)
    if math.isfinite(number) and number.is_integer() and number > 0:
        return int(number)
    return None


def positive_quantity(value: Any) -> int | float:
    """
    Coerce to a positive quantity, falling back to 1.

    Integral values come back as int so they serialize as `2`, not `2.0`.
    """
    number = to_number(value)
    if not math.isfinite(number) or number <= 0:
        return 1
    return int(number) if number.is_integer() else number


def clamp_quantity(value: int) -> int:
    return min(max(value, MIN_QUANTITY), MAX_QUANTITY)


def clean_text(value: Any, limit: int) -> str | None:
    """Trim and truncate a string field; blanks and non-strings become None."""
    if not isinstance(value, str):
        return None
    value = value.strip()[:limit]
    return value or None


def round_money(amount: float) -> float:
    """Round to cents, half-up."""
    return float(Decimal(repr(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
