from datetime import datetime
from pathlib import Path

import pytest

from logic_looper.adapters.clock import FixedClock
from logic_looper.adapters.kv_memory import InMemoryKeyValueStore
from logic_looper.app_shell.context import AppContext
from logic_looper.rules.loader import load_rules
from logic_looper.rules.models import Rules

PROJECT_ROOT = Path(__file__).parent.parent


@pytest.fixture
def rules() -> Rules:
    """The real rules.yaml from the project root."""
    return load_rules(PROJECT_ROOT / "rules.yaml")


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2024, 1, 1, 9, 0, 0))


@pytest.fixture
def kv() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def test_ctx(rules: Rules, kv: InMemoryKeyValueStore, clock: FixedClock) -> AppContext:
    """
    Full AppContext on an in-memory store and a pinned clock.
    HTTP is not wired; tests that sync pass their own transport.
    """
    return AppContext.create(rules, kv=kv, clock=clock)
