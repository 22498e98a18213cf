"""
Puzzle component models.

Two variants, both frozen so a generated puzzle can be shared and compared
structurally. The blanked cell is None in the display cells; the true value
lives in `answer`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

PuzzleType = Literal["sequence", "pattern-grid"]
Difficulty = Literal[1, 2, 3]


@dataclass(frozen=True)
class SequencePuzzle:
    """Six-term numeric sequence with one term blanked (never the first)."""

    numbers: tuple[int | None, ...]
    missing_index: int
    answer: int
    rule: str
    difficulty: int
    type: Literal["sequence"] = "sequence"

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "numbers": list(self.numbers),
            "missingIndex": self.missing_index,
            "answer": self.answer,
            "rule": self.rule,
            "difficulty": self.difficulty,
        }


@dataclass(frozen=True)
class PatternGridPuzzle:
    """
    3x3 grid with one cell blanked and four multiple-choice options.

    Options always contain the answer, are unique and positive.
    """

    grid: tuple[int | None, ...]
    missing_index: int
    answer: int
    options: tuple[int, ...]
    rule: str
    difficulty: int
    type: Literal["pattern-grid"] = "pattern-grid"

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "grid": list(self.grid),
            "missingIndex": self.missing_index,
            "answer": self.answer,
            "options": list(self.options),
            "rule": self.rule,
            "difficulty": self.difficulty,
        }


Puzzle = SequencePuzzle | PatternGridPuzzle
