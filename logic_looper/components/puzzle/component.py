"""
Puzzle component - Daily puzzle generation, answer validation and scoring.

Generation is a pure function of the date string: the date is hashed into a
seed, the seed drives a SeededRandom, and every draw happens in a fixed order.
Changing the order of any next_int call changes every puzzle ever generated,
so the draw order below is part of the contract.

Invariants:
- Same date string -> structurally identical puzzle
- Even day-of-year -> sequence, odd -> pattern-grid
- Grid options: exactly 4, unique, positive, answer included
- Score never below the configured floor
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date

from logic_looper.rules.models import PuzzleRules, ScoringRules

from ._impl import DEFAULT_NAMESPACE, DEFAULT_SEED_VERSION, SeededRandom, date_seed
from .models import PatternGridPuzzle, Puzzle, PuzzleType, SequencePuzzle
from .ports import TodayPort

SEQUENCE_LENGTH = 6
GRID_SIZE = 9
OPTION_COUNT = 4

DIFFICULTY_LABELS = {1: "Easy", 2: "Medium", 3: "Hard"}
PUZZLE_TYPE_LABELS = {"sequence": "Number Sequence", "pattern-grid": "Pattern Grid"}

_FamilyResult = tuple[list[int], str]


# --- Calendar helpers ---


def parse_date(value: str | date) -> date:
    """Accept an ISO date string (YYYY-MM-DD) or a date."""
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def day_of_year(d: date) -> int:
    """Days since January 1 of the same year (0-indexed)."""
    return (d - date(d.year, 1, 1)).days


def puzzle_type_for_day(doy: int) -> PuzzleType:
    return "sequence" if doy % 2 == 0 else "pattern-grid"


def difficulty_for_day(doy: int) -> int:
    """Three-week easy -> medium -> hard cycle."""
    return (doy // 7) % 3 + 1


# --- Sequence families ---


def _arithmetic(rng: SeededRandom, difficulty: int) -> _FamilyResult:
    start = rng.next_int(1, 20)
    diff = rng.next_int(2, 8 + difficulty * 2)
    return [start + diff * i for i in range(SEQUENCE_LENGTH)], f"+{diff}"


def _geometric(rng: SeededRandom, difficulty: int) -> _FamilyResult:
    start = rng.next_int(1, 5)
    mult = rng.next_int(2, 3)
    return [start * mult**i for i in range(SEQUENCE_LENGTH)], f"×{mult}"


def _squares(rng: SeededRandom, difficulty: int) -> _FamilyResult:
    offset = rng.next_int(0, 5)
    return [(i + 1 + offset) ** 2 for i in range(SEQUENCE_LENGTH)], f"(n+{offset})²"


def _fibonacci_like(rng: SeededRandom, difficulty: int) -> _FamilyResult:
    a = rng.next_int(1, 5)
    b = rng.next_int(1, 5)
    nums = [a, b]
    for i in range(2, SEQUENCE_LENGTH):
        nums.append(nums[i - 1] + nums[i - 2])
    return nums, "Fibonacci-like"


def _alternating_add(rng: SeededRandom, difficulty: int) -> _FamilyResult:
    start = rng.next_int(1, 10)
    d1 = rng.next_int(2, 6)
    d2 = rng.next_int(1, 4)
    nums = [start]
    for i in range(1, SEQUENCE_LENGTH):
        nums.append(nums[i - 1] + (d1 if i % 2 == 1 else d2))
    return nums, f"alternating +{d1}/+{d2}"


SEQUENCE_FAMILIES: tuple[Callable[[SeededRandom, int], _FamilyResult], ...] = (
    _arithmetic,
    _geometric,
    _squares,
    _fibonacci_like,
    _alternating_add,
)


# --- Grid families ---


def _row_sum(rng: SeededRandom, difficulty: int) -> _FamilyResult:
    target = rng.next_int(10, 20 + difficulty * 5)
    grid: list[int] = []
    for _ in range(3):
        a = rng.next_int(1, target - 2)
        b = rng.next_int(1, target - a - 1)
        grid.extend([a, b, target - a - b])
    return grid, f"Each row sums to {target}"


def _increment(rng: SeededRandom, difficulty: int) -> _FamilyResult:
    start = rng.next_int(1, 5)
    diff = rng.next_int(1, 3)
    return [start + diff * i for i in range(GRID_SIZE)], f"Increment by {diff}"


def _column_multiply(rng: SeededRandom, difficulty: int) -> _FamilyResult:
    bases = [rng.next_int(1, 4), rng.next_int(1, 4), rng.next_int(1, 4)]
    mult = rng.next_int(2, 3)
    grid = [bases[col] * mult**row for row in range(3) for col in range(3)]
    return grid, f"Columns multiply by {mult}"


GRID_FAMILIES: tuple[Callable[[SeededRandom, int], _FamilyResult], ...] = (
    _row_sum,
    _increment,
    _column_multiply,
)


# --- Generators ---


def generate_sequence_puzzle(rng: SeededRandom, difficulty: int) -> SequencePuzzle:
    """Harder days unlock more families; index 0 is never blanked."""
    family = SEQUENCE_FAMILIES[rng.next_int(0, min(len(SEQUENCE_FAMILIES) - 1, 1 + difficulty))]
    nums, rule = family(rng, difficulty)
    missing_index = rng.next_int(1, len(nums) - 1)

    return SequencePuzzle(
        numbers=tuple(None if i == missing_index else n for i, n in enumerate(nums)),
        missing_index=missing_index,
        answer=nums[missing_index],
        rule=rule,
        difficulty=difficulty,
    )


def build_options(rng: SeededRandom, answer: int) -> list[int]:
    """
    Four unique positive options including the answer, in shuffled order.

    Candidates that are non-positive or repeated are dropped; any shortfall is
    filled with answer + 2k for the smallest unused k >= current size.
    """
    candidates = [
        answer,
        answer + rng.next_int(1, 5),
        answer - rng.next_int(1, max(1, answer - 1)),
        answer + rng.next_int(2, 8),
    ]
    unique: list[int] = []
    for value in candidates:
        if value > 0 and value not in unique:
            unique.append(value)

    options = [answer]
    for value in rng.shuffle(unique):
        if value != answer and len(options) < OPTION_COUNT:
            options.append(value)

    offset = len(options) * 2
    while len(options) < OPTION_COUNT:
        value = answer + offset
        if value not in options:
            options.append(value)
        offset += 2

    return rng.shuffle(options)


def generate_pattern_grid_puzzle(rng: SeededRandom, difficulty: int) -> PatternGridPuzzle:
    family = GRID_FAMILIES[rng.next_int(0, min(len(GRID_FAMILIES) - 1, difficulty))]
    grid, rule = family(rng, difficulty)
    missing_index = rng.next_int(0, GRID_SIZE - 1)
    answer = grid[missing_index]
    options = build_options(rng, answer)

    return PatternGridPuzzle(
        grid=tuple(None if i == missing_index else n for i, n in enumerate(grid)),
        missing_index=missing_index,
        answer=answer,
        options=tuple(options),
        rule=rule,
        difficulty=difficulty,
    )


def generate_puzzle(
    date_str: str,
    *,
    namespace: str = DEFAULT_NAMESPACE,
    version: str = DEFAULT_SEED_VERSION,
) -> Puzzle:
    """Generate the puzzle for an ISO date string. Pure."""
    d = parse_date(date_str)
    rng = SeededRandom(date_seed(d.isoformat(), namespace, version))

    doy = day_of_year(d)
    difficulty = difficulty_for_day(doy)

    if puzzle_type_for_day(doy) == "sequence":
        return generate_sequence_puzzle(rng, difficulty)
    return generate_pattern_grid_puzzle(rng, difficulty)


# --- Component Entry Points ---


def get_daily_puzzle(
    date_str: str | date | None = None,
    *,
    today_port: TodayPort | None = None,
    rules: PuzzleRules | None = None,
) -> Puzzle:
    """
    Puzzle for the given date, or for today when no date is given.

    Args:
        date_str: ISO date (YYYY-MM-DD) or date; None means today
        today_port: Optional source of today's date (defaults to the system date)
        rules: Optional seeding namespace/version
    """
    if date_str is None:
        date_str = today_port.today() if today_port is not None else date.today()
    rules = rules or PuzzleRules()

    return generate_puzzle(
        parse_date(date_str).isoformat(),
        namespace=rules.namespace,
        version=rules.seed_version,
    )


def validate_answer(puzzle: Puzzle, answer: int) -> bool:
    """Exact match, no tolerance."""
    return answer == puzzle.answer


def calculate_score(
    time_taken: int,
    hints_used: int,
    difficulty: int,
    *,
    scoring: ScoringRules | None = None,
) -> int:
    """
    Score for a correct answer.

    Difficulty sets the base, the time bonus decays linearly to zero over the
    bonus window, each hint costs a fixed penalty, and the result is floored.
    """
    scoring = scoring or ScoringRules()

    base = scoring.base_per_difficulty * difficulty
    time_bonus = max(0, scoring.time_bonus_window_seconds - time_taken)
    hint_penalty = scoring.hint_penalty * hints_used
    return max(scoring.min_score, base + time_bonus - hint_penalty)


def get_hint(puzzle: Puzzle) -> str:
    """Rule label in a fixed phrase; never the numeric answer."""
    if puzzle.type == "sequence":
        return f"The pattern follows the rule: {puzzle.rule}"
    return f"Look for the pattern: {puzzle.rule}"


def difficulty_label(difficulty: int) -> str:
    return DIFFICULTY_LABELS.get(difficulty, "Easy")


def puzzle_type_label(puzzle: Puzzle) -> str:
    return PUZZLE_TYPE_LABELS[puzzle.type]
