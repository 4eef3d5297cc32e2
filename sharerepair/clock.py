"""Time source used for timestamps on emitted notifications."""

from datetime import datetime, timezone
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime:
        """Return the current time."""


class SystemClock(Clock):
    def now(self) -> datetime:
        return datetime.now(timezone.utc)
