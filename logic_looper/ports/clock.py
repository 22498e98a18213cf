from datetime import date, datetime
from typing import Protocol


class ClockPort(Protocol):
    def now(self) -> datetime:
        """Return current local time."""
        ...

    def today(self) -> date:
        """Return the current local calendar date."""
        ...

    def now_ms(self) -> int:
        """Return current time as epoch milliseconds."""
        ...
