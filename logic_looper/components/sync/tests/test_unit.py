"""
Unit tests for Sync component.
"""

from __future__ import annotations

import asyncio
from datetime import date

import pytest

from logic_looper.components.progress.component import ActivityStore
from logic_looper.components.progress.models import DailyActivity
from logic_looper.ports.kv import StorageUnavailableError

from ..component import SyncReconciler, build_sync_request, merge_remote_scores
from ..models import RemoteScore, SyncRequest, SyncStatus
from ..ports import RemoteServerError, RemoteTransportError

TODAY = date(2024, 1, 5)


# --- Test Fixtures ---


class FakeKV:
    def __init__(self) -> None:
        self.data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def delete(self, key: str) -> bool:
        return self.data.pop(key, None) is not None


class FlakyKV(FakeKV):
    def __init__(self) -> None:
        super().__init__()
        self.fail_get = False
        self.fail_set = False

    def get(self, key: str) -> str | None:
        if self.fail_get:
            raise StorageUnavailableError("sqlite", "database is locked")
        return super().get(key)

    def set(self, key: str, value: str) -> None:
        if self.fail_set:
            raise StorageUnavailableError("sqlite", "disk full")
        super().set(key, value)


class FakeRemote:
    """Fake remote scores store for testing."""

    def __init__(self, rows: list[RemoteScore] | None = None, error: Exception | None = None) -> None:
        self.rows = rows or []
        self.error = error
        self.pushed: list[tuple[str, SyncRequest]] = []
        self.fetches = 0

    async def push_scores(self, token: str, request: SyncRequest) -> None:
        if self.error:
            raise self.error
        self.pushed.append((token, request))

    async def fetch_scores(self, token: str) -> list[RemoteScore]:
        self.fetches += 1
        if self.error:
            raise self.error
        return list(self.rows)


class FakeCredentials:
    def __init__(self, token: str | None = "tok") -> None:
        self.token = token

    def get_token(self) -> str | None:
        return self.token


class UnreadableCredentials:
    def get_token(self) -> str | None:
        raise StorageUnavailableError("sqlite", "database is locked")


class FakeClock:
    def today(self) -> date:
        return TODAY


def entry(day: str, score: int = 100, solved: bool = True) -> DailyActivity:
    return DailyActivity(date=day, solved=solved, score=score, time_taken=30, difficulty=2, hints_used=1)


def row(day: str, score: int = 42) -> RemoteScore:
    return RemoteScore(date=day, score=score, time_taken=99, difficulty=3, hints_used=2)


@pytest.fixture
def store() -> ActivityStore:
    return ActivityStore(FakeKV())


def make(store: ActivityStore, remote: FakeRemote, token: str | None = "tok") -> SyncReconciler:
    return SyncReconciler(store, remote, FakeCredentials(token), FakeClock())


# --- Pure functions ---


class TestBuildSyncRequest:
    def test_nothing_solved(self) -> None:
        assert build_sync_request({}, TODAY) is None
        assert build_sync_request({"2024-01-01": entry("2024-01-01", solved=False)}, TODAY) is None

    def test_stats(self) -> None:
        activity = {
            "2024-01-03": entry("2024-01-03", 100),
            "2024-01-04": entry("2024-01-04", 250),
            "2024-01-01": entry("2024-01-01", 10, solved=False),
        }
        request = build_sync_request(activity, TODAY)
        assert request is not None
        assert [s.date for s in request.scores] == ["2024-01-03", "2024-01-04"]
        assert request.stats.streak_count == 2
        assert request.stats.total_points == 350
        assert request.stats.puzzles_solved == 2
        assert request.stats.last_played == "2024-01-04"

    def test_wire_shape(self) -> None:
        request = build_sync_request({"2024-01-04": entry("2024-01-04")}, TODAY)
        assert request is not None
        assert request.to_wire() == {
            "scores": [
                {
                    "date": "2024-01-04",
                    "solved": True,
                    "score": 100,
                    "timeTaken": 30,
                    "difficulty": 2,
                    "hintsUsed": 1,
                }
            ],
            "stats": {
                "streak_count": 1,
                "total_points": 100,
                "puzzles_solved": 1,
                "last_played": "2024-01-04",
            },
        }


class TestMergeRemoteScores:
    def test_local_wins(self) -> None:
        local = {"2024-01-01": entry("2024-01-01", 500)}
        merged, inserted = merge_remote_scores(local, [row("2024-01-01"), row("2024-01-02")])
        assert inserted == ["2024-01-02"]
        assert merged["2024-01-01"].score == 500
        assert merged["2024-01-02"] == DailyActivity("2024-01-02", True, 42, 99, 3, 2)
        assert "2024-01-02" not in local

    def test_idempotent(self) -> None:
        remote = [row("2024-01-01"), row("2024-01-02")]
        once, _ = merge_remote_scores({}, remote)
        twice, inserted = merge_remote_scores(once, remote)
        assert twice == once
        assert inserted == []


# --- Push ---


class TestPush:
    def test_nothing_to_sync(self, store: ActivityStore) -> None:
        remote = FakeRemote()
        result = asyncio.run(make(store, remote).push())
        assert result.status is SyncStatus.NOTHING_TO_SYNC
        assert remote.pushed == []

    def test_no_credential(self, store: ActivityStore) -> None:
        store.save({"2024-01-04": entry("2024-01-04")})
        remote = FakeRemote()
        result = asyncio.run(make(store, remote, token=None).push())
        assert result.status is SyncStatus.NO_CREDENTIAL
        assert remote.pushed == []

    def test_success(self, store: ActivityStore) -> None:
        store.save({"2024-01-04": entry("2024-01-04"), "2024-01-05": entry("2024-01-05")})
        remote = FakeRemote()
        result = asyncio.run(make(store, remote).push())
        assert result.status is SyncStatus.SUCCESS
        assert result.pushed == 2
        token, request = remote.pushed[0]
        assert token == "tok"
        assert request.stats.streak_count == 2

    @pytest.mark.parametrize(
        "error,status",
        [
            (RemoteTransportError("connection refused"), SyncStatus.TRANSPORT_ERROR),
            (RemoteServerError(500, "boom"), SyncStatus.SERVER_ERROR),
        ],
    )
    def test_failures_reported_not_raised(self, store: ActivityStore, error: Exception, status: SyncStatus) -> None:
        store.save({"2024-01-04": entry("2024-01-04")})
        result = asyncio.run(make(store, FakeRemote(error=error)).push())
        assert result.status is status
        assert not result.success
        assert result.message


# --- Pull ---


class TestPull:
    def test_no_credential_skips_request(self, store: ActivityStore) -> None:
        remote = FakeRemote([row("2024-01-01")])
        result = asyncio.run(make(store, remote, token=None).pull())
        assert result.status is SyncStatus.NO_CREDENTIAL
        assert remote.fetches == 0
        assert store.load() == {}

    def test_inserts_missing_only(self, store: ActivityStore) -> None:
        store.save({"2024-01-01": entry("2024-01-01", 500)})
        result = asyncio.run(make(store, FakeRemote([row("2024-01-01"), row("2024-01-02")])).pull())
        assert result.status is SyncStatus.SUCCESS
        assert result.inserted == ("2024-01-02",)
        activity = store.load()
        assert activity["2024-01-01"].score == 500
        assert activity["2024-01-02"].score == 42

    def test_pull_twice_same_result(self, store: ActivityStore) -> None:
        reconciler = make(store, FakeRemote([row("2024-01-01"), row("2024-01-02")]))
        asyncio.run(reconciler.pull())
        once = store.load()
        second = asyncio.run(reconciler.pull())
        assert store.load() == once
        assert second.inserted == ()

    def test_empty_remote(self, store: ActivityStore) -> None:
        result = asyncio.run(make(store, FakeRemote([])).pull())
        assert result.status is SyncStatus.NOTHING_TO_SYNC

    def test_transport_error_leaves_local_untouched(self, store: ActivityStore) -> None:
        store.save({"2024-01-01": entry("2024-01-01")})
        before = store.load()
        result = asyncio.run(make(store, FakeRemote(error=RemoteTransportError("timeout"))).pull())
        assert result.status is SyncStatus.TRANSPORT_ERROR
        assert store.load() == before


# --- Background ---


class TestBackground:
    def test_push_in_background(self, store: ActivityStore) -> None:
        store.save({"2024-01-04": entry("2024-01-04")})
        remote = FakeRemote()
        reconciler = make(store, remote)

        async def scenario() -> None:
            task = reconciler.push_in_background()
            assert reconciler.pending == 1
            result = await task
            assert result.status is SyncStatus.SUCCESS

        asyncio.run(scenario())
        assert reconciler.pending == 0
        assert len(remote.pushed) == 1

    def test_pull_in_background_failure_does_not_raise(self, store: ActivityStore) -> None:
        reconciler = make(store, FakeRemote(error=RemoteServerError(503, "down")))

        async def scenario() -> SyncStatus:
            task = reconciler.pull_in_background()
            return (await task).status

        assert asyncio.run(scenario()) is SyncStatus.SERVER_ERROR


# --- Storage faults ---


class TestStorageFaults:
    @pytest.fixture
    def flaky(self) -> FlakyKV:
        kv = FlakyKV()
        ActivityStore(kv).save({"2024-02-01": entry("2024-02-01"), "2024-02-02": entry("2024-02-02")})
        return kv

    def test_pull_unreadable_store_keeps_local_days(self, flaky: FlakyKV) -> None:
        store = ActivityStore(flaky)
        flaky.fail_get = True
        result = asyncio.run(make(store, FakeRemote([row("2024-03-01")])).pull())
        assert result.status is SyncStatus.STORAGE_ERROR
        assert not result.success

        flaky.fail_get = False
        assert sorted(store.load()) == ["2024-02-01", "2024-02-02"]

    def test_pull_failed_write_returns_result(self, flaky: FlakyKV) -> None:
        store = ActivityStore(flaky)
        flaky.fail_set = True
        result = asyncio.run(make(store, FakeRemote([row("2024-03-01")])).pull())
        assert result.status is SyncStatus.STORAGE_ERROR
        assert "disk full" in (result.message or "")
        assert "2024-03-01" not in store.load()

    def test_pull_unreadable_credential(self, store: ActivityStore) -> None:
        remote = FakeRemote([row("2024-03-01")])
        reconciler = SyncReconciler(store, remote, UnreadableCredentials(), FakeClock())
        result = asyncio.run(reconciler.pull())
        assert result.status is SyncStatus.STORAGE_ERROR
        assert remote.fetches == 0

    def test_push_unreadable_credential(self, store: ActivityStore) -> None:
        store.save({"2024-01-04": entry("2024-01-04")})
        remote = FakeRemote()
        reconciler = SyncReconciler(store, remote, UnreadableCredentials(), FakeClock())
        result = asyncio.run(reconciler.push())
        assert result.status is SyncStatus.STORAGE_ERROR
        assert remote.pushed == []

    def test_push_unreadable_store(self, flaky: FlakyKV) -> None:
        flaky.fail_get = True
        remote = FakeRemote()
        result = asyncio.run(make(ActivityStore(flaky), remote).push())
        assert result.status is SyncStatus.STORAGE_ERROR
        assert remote.pushed == []
