"""
Progress component models.

Stored JSON uses the camelCase keys of the browser client so an exported
localStorage blob can be imported as-is.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any


@dataclass(frozen=True)
class ActivityResult:
    """Outcome of a solved puzzle, before it is stamped with a date."""

    score: int
    time_taken: int
    difficulty: int
    hints_used: int
    solved: bool = True


@dataclass(frozen=True)
class DailyActivity:
    """One calendar day's recorded outcome, keyed by ISO date."""

    date: str
    solved: bool
    score: int
    time_taken: int  # seconds
    difficulty: int
    hints_used: int

    @classmethod
    def from_result(cls, day: str, result: ActivityResult) -> DailyActivity:
        return cls(
            date=day,
            solved=result.solved,
            score=result.score,
            time_taken=result.time_taken,
            difficulty=result.difficulty,
            hints_used=result.hints_used,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DailyActivity:
        return cls(
            date=str(data["date"]),
            solved=bool(data["solved"]),
            score=int(data["score"]),
            time_taken=int(data["timeTaken"]),
            difficulty=int(data["difficulty"]),
            hints_used=int(data["hintsUsed"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "solved": self.solved,
            "score": self.score,
            "timeTaken": self.time_taken,
            "difficulty": self.difficulty,
            "hintsUsed": self.hints_used,
        }


@dataclass(frozen=True)
class GameState:
    """
    In-progress state for today's puzzle.

    Invariant: hints_used == len(hints_revealed) <= max hints per day.
    """

    current_answer: int | None = None
    timer_started: bool = False
    start_time: int | None = None  # epoch ms
    hints_used: int = 0
    hints_revealed: tuple[str, ...] = field(default_factory=tuple)
    completed: bool = False

    def evolve(self, **changes: Any) -> GameState:
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GameState:
        revealed = tuple(str(h) for h in data.get("hintsRevealed", []))
        current = data.get("currentAnswer")
        start = data.get("startTime")
        return cls(
            current_answer=int(current) if current is not None else None,
            timer_started=bool(data.get("timerStarted", False)),
            start_time=int(start) if start is not None else None,
            hints_used=len(revealed),
            hints_revealed=revealed,
            completed=bool(data.get("completed", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "currentAnswer": self.current_answer,
            "timerStarted": self.timer_started,
            "startTime": self.start_time,
            "hintsUsed": self.hints_used,
            "hintsRevealed": list(self.hints_revealed),
            "completed": self.completed,
        }


@dataclass(frozen=True)
class ActivitySummary:
    """Profile statistics derived from the activity map."""

    puzzles_solved: int
    total_points: int
    best_score: int
    last_played: str | None
    streak: int
