"""
Conversion helpers shared by the storage layer and the handlers.

Currency values are stored as fixed-precision text so the database never
holds a binary float; everything above the storage boundary sees floats.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from storefront.config import CURRENCY_PLACES

_QUANTUM = Decimal(1).scaleb(-CURRENCY_PLACES)


def to_numeric_text(value) -> str:
    """Encode a number as a fixed-precision decimal string, e.g. 19.9 -> '19.90'."""
    if isinstance(value, bool):
        raise TypeError("Boolean is not a numeric value")
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"Not a numeric value: {value!r}")
    return str(amount.quantize(_QUANTUM, rounding=ROUND_HALF_UP))


def from_numeric_text(text) -> float | None:
    """Decode a numeric-as-text column back into a float."""
    if text is None:
        return None
    return float(text)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def next_timestamp(previous: datetime | None = None) -> datetime:
    """Current time, nudged forward so it is strictly after ``previous``."""
    now = utcnow()
    if previous is not None and now <= previous:
        now = previous + timedelta(microseconds=1)
    return now


def to_timestamp_text(dt: datetime) -> str:
    return dt.isoformat()


def parse_timestamp(text) -> datetime | None:
    """Parse an ISO-8601 timestamp column; naive values are taken as UTC."""
    if text is None:
        return None
    if isinstance(text, datetime):
        dt = text
    else:
        dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt
