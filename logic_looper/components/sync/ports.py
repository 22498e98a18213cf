"""
Sync component port definitions.
"""

from __future__ import annotations

from datetime import date
from typing import Protocol

from .models import LeaderboardEntry, RemoteScore, SyncRequest, Timeframe


class RemoteScoresPort(Protocol):
    """Remote scores store."""

    async def push_scores(self, token: str, request: SyncRequest) -> None:
        """
        Send solved days and derived stats.

        Raises:
            RemoteTransportError: Network failure or timeout
            RemoteServerError: Non-2xx response
        """
        ...

    async def fetch_scores(self, token: str) -> list[RemoteScore]:
        """
        Fetch every score the remote store holds for the user.

        Raises:
            RemoteTransportError: Network failure or timeout
            RemoteServerError: Non-2xx response or malformed body
        """
        ...


class LeaderboardPort(Protocol):
    """Read-only leaderboard query."""

    async def fetch_leaderboard(self, timeframe: Timeframe = "all") -> list[LeaderboardEntry]:
        ...


class CredentialPort(Protocol):
    """Bearer credential source; None means not logged in."""

    def get_token(self) -> str | None:
        ...


class SyncClockPort(Protocol):
    def today(self) -> date:
        """Get the current local calendar date."""
        ...


class RemoteError(Exception):
    """Base class for remote store errors."""


class RemoteTransportError(RemoteError):
    """Raised when the request never got a response."""


class RemoteServerError(RemoteError):
    """Raised when the server answered with an error or an unreadable body."""

    def __init__(self, status_code: int | None, reason: str) -> None:
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"Remote error ({status_code}): {reason}")
