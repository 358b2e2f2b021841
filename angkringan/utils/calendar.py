"""Mini README: Local calendar helpers for epoch-millisecond timestamps.

Transactions carry epoch milliseconds while the stall thinks in local
calendar days. These helpers convert between the two using the host's local
timezone: a day starts at local midnight and ends at 23:59:59.999.
"""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional

from ..errors import ValidationError

_MS_PER_SECOND = 1000


def _to_ms(moment: datetime) -> int:
    return round(moment.timestamp() * _MS_PER_SECOND)


def day_start_ms(day: date) -> int:
    """Epoch milliseconds of local midnight at the start of ``day``."""

    return _to_ms(datetime.combine(day, time.min))


def day_end_ms(day: date) -> int:
    """Epoch milliseconds of the last local millisecond of ``day``."""

    return _to_ms(datetime.combine(day, time(23, 59, 59, 999000)))


def local_date(timestamp_ms: int) -> date:
    """Local calendar day a timestamp falls on."""

    return datetime.fromtimestamp(timestamp_ms / _MS_PER_SECOND).date()


def try_local_date(timestamp_ms: int) -> Optional[date]:
    """Like ``local_date`` but ``None`` for timestamps the platform cannot represent."""

    try:
        return local_date(timestamp_ms)
    except (OverflowError, OSError, ValueError):
        return None


def parse_iso_date(value: object) -> date:
    """Parse ISO strings or date objects, mirroring the date pickers' format."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError as error:
            raise ValidationError(f"Invalid calendar date: {value!r}") from error
    raise ValidationError("Dates must be provided as ISO strings or date/datetime instances.")
