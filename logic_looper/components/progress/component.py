"""
Progress component - Activity Store, Game State and streak.

The activity map (date -> DailyActivity) and the per-day game state live in
an injected KeyValueStorePort as JSON. load() never raises: missing or
corrupt data degrades to an empty map / None and is logged.
Read-modify-write paths read strictly: a StorageError aborts them before
anything is saved.

Invariants:
- At most one DailyActivity per date; recording again overwrites that date
- Entries are only removed by reset()
- merge_missing() never touches a date that already exists locally
- Each read-modify-write runs under the store's lock
- An unreadable backend never causes a write
"""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Iterable, Mapping
from datetime import date, timedelta

from logic_looper.ports.kv import StorageError

from .models import ActivityResult, ActivitySummary, DailyActivity, GameState
from .ports import KeyValueStorePort

logger = logging.getLogger(__name__)

DEFAULT_ACTIVITY_KEY = "logic-looper-activity"
DEFAULT_STATE_KEY_PREFIX = "logic-looper-state"
MAX_HINTS_PER_DAY = 3

ActivityMap = dict[str, DailyActivity]


# --- Pure Functions (Functional Core) ---


def _day_key(day: date | str) -> str:
    return day if isinstance(day, str) else day.isoformat()


def calculate_streak(activity: Mapping[str, DailyActivity], today: date) -> int:
    """
    Consecutive solved days ending today, or yesterday if today is unsolved.

    An unsolved today is a grace period; any earlier gap ends the count.
    """

    def solved(d: date) -> bool:
        entry = activity.get(d.isoformat())
        return entry is not None and entry.solved

    current = today if solved(today) else today - timedelta(days=1)

    streak = 0
    while solved(current):
        streak += 1
        current -= timedelta(days=1)
    return streak


def remaining_hints(hints_used: int, max_hints: int = MAX_HINTS_PER_DAY) -> int:
    return max(0, max_hints - hints_used)


def activity_intensity(entry: DailyActivity | None) -> int:
    """Heatmap bucket 0-4 for a day."""
    if entry is None or not entry.solved:
        return 0
    if entry.score >= 300:
        return 4
    if entry.score >= 200:
        return 3
    if entry.score >= 100:
        return 2
    return 1


def solved_dates_in_year(activity: Mapping[str, DailyActivity], year: int) -> list[str]:
    prefix = f"{year:04d}-"
    return sorted(k for k, v in activity.items() if v.solved and k.startswith(prefix))


def summarize_activity(activity: Mapping[str, DailyActivity], today: date) -> ActivitySummary:
    solved = [a for a in activity.values() if a.solved]
    return ActivitySummary(
        puzzles_solved=len(solved),
        total_points=sum(a.score for a in solved),
        best_score=max((a.score for a in solved), default=0),
        last_played=max((a.date for a in solved), default=None),
        streak=calculate_streak(activity, today),
    )


def parse_activity(raw: str | None) -> ActivityMap:
    """
    Decode the stored activity JSON.

    A document that isn't a JSON object yields an empty map; individual
    malformed entries are dropped.
    """
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Stored activity is not valid JSON; starting from empty")
        return {}
    if not isinstance(data, dict):
        logger.warning("Stored activity is not an object; starting from empty")
        return {}

    activity: ActivityMap = {}
    for key, value in data.items():
        try:
            entry = DailyActivity.from_dict({**value, "date": key})
        except (KeyError, TypeError, ValueError):
            logger.warning("Dropping malformed activity entry for %s", key)
            continue
        activity[key] = entry
    return activity


def serialize_activity(activity: Mapping[str, DailyActivity]) -> str:
    return json.dumps({k: v.to_dict() for k, v in activity.items()}, sort_keys=True)


# --- Stores (Imperative Shell) ---


class ActivityStore:
    """Durable date -> DailyActivity map on top of a key-value store."""

    def __init__(self, kv: KeyValueStorePort, *, key: str = DEFAULT_ACTIVITY_KEY) -> None:
        self.kv = kv
        self.key = key
        self._lock = threading.Lock()

    def read(self) -> ActivityMap:
        """Load the map, letting StorageError propagate."""
        return parse_activity(self.kv.get(self.key))

    def load(self) -> ActivityMap:
        """Load the map for display; an unreadable backend reads as empty."""
        try:
            return self.read()
        except StorageError:
            logger.warning("Activity storage unreadable; starting from empty", exc_info=True)
            return {}

    def save(self, activity: Mapping[str, DailyActivity]) -> None:
        self.kv.set(self.key, serialize_activity(activity))

    def get(self, day: date | str) -> DailyActivity | None:
        return self.load().get(_day_key(day))

    def record_result(self, result: ActivityResult, *, today: date) -> DailyActivity:
        """Stamp result with today's date and overwrite any entry for today."""
        entry = DailyActivity.from_result(today.isoformat(), result)
        with self._lock:
            # A failed read aborts the write instead of saving over history.
            activity = self.read()
            activity[entry.date] = entry
            self.save(activity)
        logger.info("Recorded result for %s (score %d)", entry.date, entry.score)
        return entry

    def merge_missing(self, entries: Iterable[DailyActivity]) -> list[str]:
        """
        Insert entries whose date is absent locally.

        Returns:
            Dates that were inserted (existing local dates are never touched)
        """
        with self._lock:
            activity = self.read()
            inserted: list[str] = []
            for entry in entries:
                if entry.date in activity:
                    continue
                activity[entry.date] = entry
                inserted.append(entry.date)
            if inserted:
                self.save(activity)
        return inserted

    def reset(self) -> bool:
        """Delete all recorded activity."""
        with self._lock:
            deleted = self.kv.delete(self.key)
        logger.info("Activity reset (existed: %s)", deleted)
        return deleted

    def streak(self, today: date) -> int:
        return calculate_streak(self.load(), today)

    def summary(self, today: date) -> ActivitySummary:
        return summarize_activity(self.load(), today)


class GameStateStore:
    """Per-day game state, one key per date."""

    def __init__(
        self,
        kv: KeyValueStorePort,
        *,
        key_prefix: str = DEFAULT_STATE_KEY_PREFIX,
        max_hints: int = MAX_HINTS_PER_DAY,
    ) -> None:
        self.kv = kv
        self.key_prefix = key_prefix
        self.max_hints = max_hints

    def key_for(self, day: date | str) -> str:
        return f"{self.key_prefix}-{_day_key(day)}"

    def load(self, day: date | str) -> GameState | None:
        try:
            raw = self.kv.get(self.key_for(day))
        except StorageError:
            logger.warning("Game state storage unreadable", exc_info=True)
            return None
        if not raw:
            return None
        try:
            state = GameState.from_dict(json.loads(raw))
        except (json.JSONDecodeError, AttributeError, TypeError, ValueError):
            logger.warning("Discarding corrupt game state for %s", _day_key(day))
            return None
        if state.hints_used > self.max_hints:
            logger.warning("Stored game state for %s exceeds the hint limit; truncating", _day_key(day))
            revealed = state.hints_revealed[: self.max_hints]
            state = state.evolve(hints_revealed=revealed, hints_used=len(revealed))
        return state

    def save(self, state: GameState, day: date | str) -> None:
        self.kv.set(self.key_for(day), json.dumps(state.to_dict()))

    def clear(self, day: date | str) -> bool:
        return self.kv.delete(self.key_for(day))
