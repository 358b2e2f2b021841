"""Mini README: Clock collaborators.

Structure:
    * Clock - protocol exposing ``now_ms`` and ``today``.
    * SystemClock - wall clock in the machine's local timezone.
    * FixedClock - deterministic clock for tests and replays.
"""

from __future__ import annotations

import time
from datetime import date
from typing import Protocol

from .calendar import local_date


class Clock(Protocol):
    def now_ms(self) -> int:
        """Current time as integer epoch milliseconds."""

    def today(self) -> date:
        """Current local calendar day."""


class SystemClock:
    """Read the operating system clock."""

    def now_ms(self) -> int:
        return time.time_ns() // 1_000_000

    def today(self) -> date:
        return local_date(self.now_ms())


class FixedClock:
    """Clock frozen at ``now_ms`` until explicitly advanced."""

    def __init__(self, now_ms: int) -> None:
        self._now_ms = now_ms

    def now_ms(self) -> int:
        return self._now_ms

    def today(self) -> date:
        return local_date(self._now_ms)

    def advance(self, milliseconds: int) -> None:
        self._now_ms += milliseconds
