"""
Progress component - Activity Store, Game State and streak.
"""

from .component import (
    DEFAULT_ACTIVITY_KEY,
    DEFAULT_STATE_KEY_PREFIX,
    MAX_HINTS_PER_DAY,
    ActivityMap,
    ActivityStore,
    GameStateStore,
    activity_intensity,
    calculate_streak,
    parse_activity,
    remaining_hints,
    serialize_activity,
    solved_dates_in_year,
    summarize_activity,
)
from .models import ActivityResult, ActivitySummary, DailyActivity, GameState
from .ports import KeyValueStorePort

__all__ = [
    # Stores
    "ActivityStore",
    "GameStateStore",
    # Pure functions
    "calculate_streak",
    "remaining_hints",
    "activity_intensity",
    "solved_dates_in_year",
    "summarize_activity",
    "parse_activity",
    "serialize_activity",
    # Constants
    "DEFAULT_ACTIVITY_KEY",
    "DEFAULT_STATE_KEY_PREFIX",
    "MAX_HINTS_PER_DAY",
    # Models
    "ActivityMap",
    "ActivityResult",
    "ActivitySummary",
    "DailyActivity",
    "GameState",
    # Ports
    "KeyValueStorePort",
]
