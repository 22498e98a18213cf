"""
Puzzle component - Deterministic daily puzzle generation and scoring.
"""

from ._impl import SeededRandom, date_seed, hash_string, seed_string
from .component import (
    build_options,
    calculate_score,
    day_of_year,
    difficulty_for_day,
    difficulty_label,
    generate_pattern_grid_puzzle,
    generate_puzzle,
    generate_sequence_puzzle,
    get_daily_puzzle,
    get_hint,
    parse_date,
    puzzle_type_for_day,
    puzzle_type_label,
    validate_answer,
)
from .models import PatternGridPuzzle, Puzzle, PuzzleType, SequencePuzzle
from .ports import TodayPort

__all__ = [
    # PRNG and seeding
    "SeededRandom",
    "hash_string",
    "seed_string",
    "date_seed",
    # Calendar
    "parse_date",
    "day_of_year",
    "puzzle_type_for_day",
    "difficulty_for_day",
    # Generation
    "generate_puzzle",
    "generate_sequence_puzzle",
    "generate_pattern_grid_puzzle",
    "build_options",
    # Entry points
    "get_daily_puzzle",
    "validate_answer",
    "calculate_score",
    "get_hint",
    "difficulty_label",
    "puzzle_type_label",
    # Models
    "Puzzle",
    "PuzzleType",
    "SequencePuzzle",
    "PatternGridPuzzle",
    # Ports
    "TodayPort",
]
