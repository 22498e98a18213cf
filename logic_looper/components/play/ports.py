"""
Play component port definitions.
"""

from __future__ import annotations

from datetime import date
from typing import Protocol


class PlayClockPort(Protocol):
    """Time provider for the play session."""

    def today(self) -> date:
        """Get the current local calendar date."""
        ...

    def now_ms(self) -> int:
        """Get current time in epoch milliseconds."""
        ...
