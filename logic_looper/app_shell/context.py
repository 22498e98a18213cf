from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path

import httpx

from logic_looper.adapters.clock import SystemClock
from logic_looper.adapters.credentials import StoredCredentials
from logic_looper.adapters.http_scores import HttpScoresClient
from logic_looper.adapters.kv_file import FileKeyValueStore
from logic_looper.adapters.kv_memory import InMemoryKeyValueStore
from logic_looper.adapters.kv_sqlite import SQLiteKeyValueStore
from logic_looper.components.play.component import PlaySession
from logic_looper.components.progress.component import ActivityStore, GameStateStore
from logic_looper.components.puzzle.component import get_daily_puzzle
from logic_looper.components.puzzle.models import Puzzle
from logic_looper.components.sync.component import SyncReconciler
from logic_looper.ports.clock import ClockPort
from logic_looper.ports.kv import KeyValueStorePort
from logic_looper.rules.models import Rules


def build_kv_store(rules: Rules, data_dir: Path) -> KeyValueStorePort:
    backend = rules.storage.backend
    if backend == "memory":
        return InMemoryKeyValueStore()
    data_dir.mkdir(parents=True, exist_ok=True)
    if backend == "file":
        return FileKeyValueStore(data_dir)
    return SQLiteKeyValueStore(str(data_dir / rules.storage.filename))


@dataclass
class AppContext:
    rules: Rules
    clock: ClockPort
    kv: KeyValueStorePort
    activity_store: ActivityStore
    state_store: GameStateStore
    credentials: StoredCredentials
    remote: HttpScoresClient
    reconciler: SyncReconciler

    @classmethod
    def create(
        cls,
        rules: Rules,
        *,
        data_dir: Path | None = None,
        kv: KeyValueStorePort | None = None,
        clock: ClockPort | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> AppContext:
        # Adapters
        if kv is None:
            kv = build_kv_store(rules, data_dir or Path(rules.storage.data_dir))
        clock = clock or SystemClock()
        credentials = StoredCredentials(kv, key=rules.storage.token_key, env_var=rules.sync.token_env)
        remote = HttpScoresClient(rules.sync.api_url, timeout=rules.sync.timeout_seconds, transport=transport)

        # Stores
        activity_store = ActivityStore(kv, key=rules.storage.activity_key)
        state_store = GameStateStore(
            kv, key_prefix=rules.storage.state_key_prefix, max_hints=rules.hints.max_per_day
        )

        reconciler = SyncReconciler(activity_store, remote, credentials, clock)

        return cls(
            rules=rules,
            clock=clock,
            kv=kv,
            activity_store=activity_store,
            state_store=state_store,
            credentials=credentials,
            remote=remote,
            reconciler=reconciler,
        )

    def puzzle(self, day: date | str | None = None) -> Puzzle:
        return get_daily_puzzle(day, today_port=self.clock, rules=self.rules.puzzle)

    def session(self, day: date | None = None) -> PlaySession:
        day = day or self.clock.today()
        return PlaySession(
            self.puzzle(day),
            activity_store=self.activity_store,
            state_store=self.state_store,
            clock=self.clock,
            rules=self.rules,
            day=day,
        )
