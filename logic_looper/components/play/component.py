"""
Play component - One day's puzzle session.

Pure state transitions (start_timer, reveal_hint, submit_answer) plus
PlaySession, which binds them to today's puzzle, the stores and a clock.

Invariants:
- hints_used == len(hints_revealed) <= max hints per day
- Timer starts on the first interaction (hint or submission)
- A correct answer records exactly one DailyActivity for the session's date
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date

from logic_looper.components.progress.component import (
    MAX_HINTS_PER_DAY,
    ActivityStore,
    GameStateStore,
    remaining_hints,
)
from logic_looper.components.progress.models import ActivityResult, DailyActivity, GameState
from logic_looper.components.puzzle.component import calculate_score, get_hint, validate_answer
from logic_looper.components.puzzle.models import Puzzle
from logic_looper.rules.models import Rules, ScoringRules

from .models import HintOutput, PlayError, SubmitOutput
from .ports import PlayClockPort

logger = logging.getLogger(__name__)

ALREADY_COMPLETED = PlayError(code="already_completed", message="Today's puzzle is already solved")
NO_HINTS_LEFT = PlayError(code="no_hints_left", message="No hints left for today")


# --- Pure Functions (Functional Core) ---


def initial_game_state(today_activity: DailyActivity | None, saved: GameState | None) -> GameState:
    """State to resume with: completed if today is solved, else the saved state, else fresh."""
    if today_activity is not None and today_activity.solved:
        return GameState(completed=True)
    return saved or GameState()


def start_timer(state: GameState, now_ms: int) -> GameState:
    if state.timer_started or state.completed:
        return state
    return state.evolve(timer_started=True, start_time=now_ms)


def elapsed_seconds(state: GameState, now_ms: int) -> int:
    """Whole seconds since the timer started; 0 if it never did."""
    if state.start_time is None:
        return 0
    return max(0, (now_ms - state.start_time) // 1000)


def reveal_hint(
    state: GameState,
    puzzle: Puzzle,
    *,
    now_ms: int,
    max_hints: int = MAX_HINTS_PER_DAY,
) -> HintOutput:
    if state.completed:
        return HintOutput(state=state, hint=None, remaining=0, errors=[ALREADY_COMPLETED], success=False)

    state = start_timer(state, now_ms)
    if remaining_hints(state.hints_used, max_hints) <= 0:
        return HintOutput(state=state, hint=None, remaining=0, errors=[NO_HINTS_LEFT], success=False)

    hint = get_hint(puzzle)
    state = state.evolve(
        hints_used=state.hints_used + 1,
        hints_revealed=state.hints_revealed + (hint,),
    )
    return HintOutput(state=state, hint=hint, remaining=remaining_hints(state.hints_used, max_hints))


def submit_answer(
    state: GameState,
    puzzle: Puzzle,
    answer: int,
    *,
    now_ms: int,
    scoring: ScoringRules | None = None,
) -> SubmitOutput:
    """
    Check an answer and, when correct, compute the score.

    The returned activity is not persisted here; PlaySession does that.
    """
    if state.completed:
        return SubmitOutput(state=state, correct=False, errors=[ALREADY_COMPLETED], success=False)

    state = start_timer(state, now_ms)
    if not validate_answer(puzzle, answer):
        return SubmitOutput(state=state, correct=False)

    time_taken = elapsed_seconds(state, now_ms)
    score = calculate_score(time_taken, state.hints_used, puzzle.difficulty, scoring=scoring)
    return SubmitOutput(
        state=state.evolve(completed=True, current_answer=answer),
        correct=True,
        score=score,
        time_taken=time_taken,
    )


# --- Component Entry Points ---


class PlaySession:
    """
    Today's puzzle bound to the stores.

    The session date is fixed when the session is created, so a session that
    spans midnight keeps recording against the day it started on.
    """

    def __init__(
        self,
        puzzle: Puzzle,
        *,
        activity_store: ActivityStore,
        state_store: GameStateStore,
        clock: PlayClockPort,
        rules: Rules | None = None,
        day: date | None = None,
        on_solved: Callable[[DailyActivity], None] | None = None,
    ) -> None:
        self.puzzle = puzzle
        self.activity_store = activity_store
        self.state_store = state_store
        self.clock = clock
        self.rules = rules or Rules()
        self.day = day or clock.today()
        self.on_solved = on_solved

    def state(self) -> GameState:
        return initial_game_state(self.activity_store.get(self.day), self.state_store.load(self.day))

    def _save(self, state: GameState) -> None:
        self.state_store.save(state, self.day)

    def start(self) -> GameState:
        current = self.state()
        state = start_timer(current, self.clock.now_ms())
        if state is not current:
            self._save(state)
        return state

    def hint(self) -> HintOutput:
        out = reveal_hint(
            self.state(),
            self.puzzle,
            now_ms=self.clock.now_ms(),
            max_hints=self.rules.hints.max_per_day,
        )
        self._save(out.state)
        return out

    def submit(self, answer: int) -> SubmitOutput:
        out = submit_answer(
            self.state(),
            self.puzzle,
            answer,
            now_ms=self.clock.now_ms(),
            scoring=self.rules.scoring,
        )
        if not out.success:
            return out

        if not out.correct:
            self._save(out.state)
            logger.debug("Wrong answer for %s", self.day)
            return out

        # Record before marking the day completed, so a failed write leaves it playable.
        activity = self.activity_store.record_result(
            ActivityResult(
                score=out.score,
                time_taken=out.time_taken,
                difficulty=self.puzzle.difficulty,
                hints_used=out.state.hints_used,
            ),
            today=self.day,
        )
        self._save(out.state)
        if self.on_solved is not None:
            self.on_solved(activity)

        return SubmitOutput(
            state=out.state,
            correct=True,
            score=out.score,
            time_taken=out.time_taken,
            activity=activity,
        )
