"""
Play component - Timer, hints and answer submission for today's puzzle.
"""

from .component import (
    PlaySession,
    elapsed_seconds,
    initial_game_state,
    reveal_hint,
    start_timer,
    submit_answer,
)
from .models import HintOutput, PlayError, SubmitOutput
from .ports import PlayClockPort

__all__ = [
    "PlaySession",
    "initial_game_state",
    "start_timer",
    "elapsed_seconds",
    "reveal_hint",
    "submit_answer",
    "HintOutput",
    "PlayError",
    "SubmitOutput",
    "PlayClockPort",
]
