"""
Sync component models.

Wire models are pydantic so remote payloads are validated on the way in and
serialised with the exact field names the scores API expects. Push sends
DailyActivity in its client (camelCase) shape; the scores list comes back in
snake_case.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from logic_looper.components.progress.models import DailyActivity

Timeframe = Literal["all", "week", "today"]


# --- Result Types ---


class SyncStatus(str, Enum):
    """Outcome of a push or pull."""

    SUCCESS = "success"
    NOTHING_TO_SYNC = "nothing_to_sync"
    NO_CREDENTIAL = "no_credential"
    TRANSPORT_ERROR = "transport_error"
    SERVER_ERROR = "server_error"
    STORAGE_ERROR = "storage_error"


@dataclass(frozen=True)
class SyncResult:
    """Result of a sync attempt. Never raised, always returned."""

    status: SyncStatus
    pushed: int = 0
    inserted: tuple[str, ...] = ()
    message: str | None = None

    @property
    def success(self) -> bool:
        return self.status in (SyncStatus.SUCCESS, SyncStatus.NOTHING_TO_SYNC)


# --- Wire Models ---


class ActivityPayload(BaseModel):
    """DailyActivity as sent in the push body."""

    model_config = ConfigDict(populate_by_name=True)

    date: str
    solved: bool
    score: int
    time_taken: int = Field(alias="timeTaken")
    difficulty: int
    hints_used: int = Field(alias="hintsUsed")

    @classmethod
    def from_activity(cls, activity: DailyActivity) -> ActivityPayload:
        return cls(
            date=activity.date,
            solved=activity.solved,
            score=activity.score,
            time_taken=activity.time_taken,
            difficulty=activity.difficulty,
            hints_used=activity.hints_used,
        )


class SyncStats(BaseModel):
    streak_count: int
    total_points: int
    puzzles_solved: int
    last_played: str | None


class SyncRequest(BaseModel):
    """Body of POST /scores/sync."""

    scores: list[ActivityPayload]
    stats: SyncStats

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


class RemoteScore(BaseModel):
    """One row of GET /scores."""

    date: str
    score: int
    time_taken: int
    difficulty: int
    hints_used: int

    def to_activity(self) -> DailyActivity:
        # The server only stores solved days.
        return DailyActivity(
            date=self.date,
            solved=True,
            score=self.score,
            time_taken=self.time_taken,
            difficulty=self.difficulty,
            hints_used=self.hints_used,
        )


class ScoresResponse(BaseModel):
    scores: list[RemoteScore] = Field(default_factory=list)


class LeaderboardEntry(BaseModel):
    """Ranked row served by the leaderboard collaborator."""

    user_id: str
    display_name: str | None = None
    total_score: int
    puzzles_solved: int
    rank: int
