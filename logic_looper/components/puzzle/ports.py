"""
Puzzle component port definitions.
"""

from __future__ import annotations

from datetime import date
from typing import Protocol


class TodayPort(Protocol):
    """Source of "today" for callers that don't pass an explicit date."""

    def today(self) -> date:
        """Get the current local calendar date."""
        ...
