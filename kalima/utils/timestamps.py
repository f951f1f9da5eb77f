"""
Timestamp helpers for store documents
"""

from datetime import datetime, timezone
from typing import Any, Optional

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def utc_now() -> datetime:
    """Get current UTC datetime (timezone-aware)"""
    return datetime.now(timezone.utc)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Best-effort conversion of a stored timestamp to an aware datetime.

    Accepts datetimes (Firestore returns DatetimeWithNanoseconds, a datetime
    subclass), ISO-8601 strings, epoch seconds and serialized Firestore
    timestamps ({"seconds": ..., "nanoseconds": ...} or the "_seconds"
    variant). Anything else yields None.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return parse_timestamp(datetime.fromisoformat(text))
        except ValueError:
            return None

    if isinstance(value, dict):
        seconds = value.get("seconds", value.get("_seconds"))
        if isinstance(seconds, (int, float)) and not isinstance(seconds, bool):
            nanos = value.get("nanoseconds", value.get("_nanoseconds")) or 0
            return parse_timestamp(seconds + nanos / 1e9)
        return None

    # Objects exposing to_datetime() / ToDatetime() (protobuf Timestamp)
    for attr in ("to_datetime", "ToDatetime"):
        converter = getattr(value, attr, None)
        if callable(converter):
            try:
                return parse_timestamp(converter())
            except Exception:
                return None
    return None


def sort_key(value: Optional[datetime]) -> datetime:
    """Sort key that treats missing timestamps as the epoch"""
    return value if value is not None else EPOCH
