"""
Duration arithmetic over GitHub timestamps.

GitHub reports times as ISO-8601 strings (``2023-05-15T17:02:11Z``). Missing
or garbled timestamps count as a zero duration instead of failing the
report.
"""
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal, ROUND_HALF_DOWN, ROUND_HALF_UP
from typing import Iterable, Optional, Tuple, Union

Timestamp = Union[str, datetime, date, None]

_ONE_MS = timedelta(milliseconds=1)
_MS_PER_MINUTE = Decimal(1000 * 60)
_TWO_PLACES = Decimal("0.01")


def parse_timestamp(value: Timestamp) -> Optional[datetime]:
    """Parse a timestamp into an aware datetime, or None if it can't be read.

    Naive values are taken as UTC.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            parsed = datetime.fromisoformat(text.replace('Z', '+00:00'))
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def duration_ms(start: Timestamp, end: Timestamp) -> int:
    """Milliseconds from ``start`` to ``end``; 0 if either is unreadable.

    A negative result (end before start) is returned unchanged.
    """
    started = parse_timestamp(start)
    finished = parse_timestamp(end)
    if started is None or finished is None:
        return 0
    return (finished - started) // _ONE_MS


def total_duration_ms(pairs: Iterable[Tuple[Timestamp, Timestamp]]) -> int:
    return sum(duration_ms(start, end) for start, end in pairs)


def ms_to_minutes(ms: int) -> float:
    """Convert milliseconds to minutes rounded to two decimals.

    Halves round toward positive infinity, so -0.005 becomes -0.00.
    """
    rounding = ROUND_HALF_UP if ms >= 0 else ROUND_HALF_DOWN
    minutes = (Decimal(ms) / _MS_PER_MINUTE).quantize(_TWO_PLACES, rounding=rounding)
    return float(minutes)


def format_minutes(value: float) -> str:
    """Render a rounded minute value without trailing zeros (``2.0`` -> ``2``)."""
    if value == 0:
        return "0"
    return f"{value:.2f}".rstrip('0').rstrip('.')
