"""Mini README: Small helpers shared across the till.

Exports the clock abstraction (so tests can pin "now") and the local
calendar helpers used for day boundaries in reports.
"""

from .calendar import day_end_ms, day_start_ms, local_date, parse_iso_date, try_local_date
from .clock import Clock, FixedClock, SystemClock

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "day_end_ms",
    "day_start_ms",
    "local_date",
    "parse_iso_date",
    "try_local_date",
]
