"""
Play component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from logic_looper.components.progress.models import DailyActivity, GameState


@dataclass(frozen=True)
class PlayError:
    """Refused play action."""

    code: str
    message: str


@dataclass(frozen=True)
class HintOutput:
    """Output from revealing a hint."""

    state: GameState
    hint: str | None
    remaining: int
    errors: list[PlayError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class SubmitOutput:
    """
    Output from submitting an answer.

    A wrong answer is a normal result (correct=False), not an error.
    """

    state: GameState
    correct: bool
    score: int | None = None
    time_taken: int | None = None
    activity: DailyActivity | None = None
    errors: list[PlayError] = field(default_factory=list)
    success: bool = True
