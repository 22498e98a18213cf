"""
Sync component - Push local solved days to the remote store, pull unseen ones back.

Both directions are one-shot and best-effort: the local store is the source
of truth, so failures are reported as a SyncResult status and never raised.

Invariants:
- Push sends only solved entries; nothing is sent without a credential
- Pull inserts only dates absent locally (local wins on conflict)
- Pull is idempotent: repeating it with the same remote data changes nothing
- A StorageError while reading or merging is reported as STORAGE_ERROR
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine, Iterable, Mapping
from datetime import date
from typing import Any

from logic_looper.components.progress.component import ActivityStore, calculate_streak
from logic_looper.components.progress.models import DailyActivity
from logic_looper.ports.kv import StorageError

from .models import (
    ActivityPayload,
    RemoteScore,
    SyncRequest,
    SyncResult,
    SyncStats,
    SyncStatus,
)
from .ports import (
    CredentialPort,
    RemoteScoresPort,
    RemoteServerError,
    RemoteTransportError,
    SyncClockPort,
)

logger = logging.getLogger(__name__)


# --- Pure Functions (Functional Core) ---


def build_sync_request(activity: Mapping[str, DailyActivity], today: date) -> SyncRequest | None:
    """
    Push body for every solved day, or None when nothing is solved.

    The streak is taken over the whole local map; points, count and last
    played cover the pushed batch.
    """
    solved = sorted((a for a in activity.values() if a.solved), key=lambda a: a.date)
    if not solved:
        return None

    return SyncRequest(
        scores=[ActivityPayload.from_activity(a) for a in solved],
        stats=SyncStats(
            streak_count=calculate_streak(activity, today),
            total_points=sum(a.score for a in solved),
            puzzles_solved=len(solved),
            last_played=solved[-1].date,
        ),
    )


def merge_remote_scores(
    activity: Mapping[str, DailyActivity],
    remote: Iterable[RemoteScore],
) -> tuple[dict[str, DailyActivity], list[str]]:
    """
    Adopt remote rows for dates missing locally.

    Returns:
        (merged map, dates inserted)
    """
    merged = dict(activity)
    inserted: list[str] = []
    for row in remote:
        if row.date in merged:
            continue
        merged[row.date] = row.to_activity()
        inserted.append(row.date)
    return merged, inserted


def _storage_failure(direction: str, error: StorageError) -> SyncResult:
    logger.warning("%s failed (storage): %s", direction, error)
    return SyncResult(status=SyncStatus.STORAGE_ERROR, message=str(error))


# --- Component Entry Points ---


class SyncReconciler:
    """Push/pull between the local ActivityStore and a RemoteScoresPort."""

    def __init__(
        self,
        activity_store: ActivityStore,
        remote: RemoteScoresPort,
        credentials: CredentialPort,
        clock: SyncClockPort,
    ) -> None:
        self.activity_store = activity_store
        self.remote = remote
        self.credentials = credentials
        self.clock = clock
        self._tasks: set[asyncio.Task[SyncResult]] = set()

    async def push(self) -> SyncResult:
        try:
            request = build_sync_request(self.activity_store.read(), self.clock.today())
            if request is None:
                return SyncResult(status=SyncStatus.NOTHING_TO_SYNC)
            token = self.credentials.get_token()
        except StorageError as e:
            return _storage_failure("Push", e)

        if not token:
            return SyncResult(status=SyncStatus.NO_CREDENTIAL)

        try:
            await self.remote.push_scores(token, request)
        except RemoteTransportError as e:
            logger.warning("Push failed (transport): %s", e)
            return SyncResult(status=SyncStatus.TRANSPORT_ERROR, message=str(e))
        except RemoteServerError as e:
            logger.warning("Push failed (server): %s", e)
            return SyncResult(status=SyncStatus.SERVER_ERROR, message=str(e))

        logger.info("Pushed %d solved days", len(request.scores))
        return SyncResult(status=SyncStatus.SUCCESS, pushed=len(request.scores))

    async def pull(self) -> SyncResult:
        try:
            token = self.credentials.get_token()
        except StorageError as e:
            return _storage_failure("Pull", e)
        if not token:
            return SyncResult(status=SyncStatus.NO_CREDENTIAL)

        try:
            remote = await self.remote.fetch_scores(token)
        except RemoteTransportError as e:
            logger.warning("Pull failed (transport): %s", e)
            return SyncResult(status=SyncStatus.TRANSPORT_ERROR, message=str(e))
        except RemoteServerError as e:
            logger.warning("Pull failed (server): %s", e)
            return SyncResult(status=SyncStatus.SERVER_ERROR, message=str(e))

        if not remote:
            return SyncResult(status=SyncStatus.NOTHING_TO_SYNC)

        # Merge happens against a fresh load inside the store lock, so a local
        # write made while the request was in flight is never overwritten.
        try:
            inserted = self.activity_store.merge_missing(row.to_activity() for row in remote)
        except StorageError as e:
            return _storage_failure("Pull", e)
        logger.info("Pulled %d remote rows, adopted %d", len(remote), len(inserted))
        return SyncResult(status=SyncStatus.SUCCESS, inserted=tuple(inserted))

    # --- Fire-and-forget ---

    def _spawn(self, coro: Coroutine[Any, Any, SyncResult], name: str) -> asyncio.Task[SyncResult]:
        task = asyncio.get_running_loop().create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task[SyncResult]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Background %s failed", task.get_name(), exc_info=exc)

    def push_in_background(self) -> asyncio.Task[SyncResult]:
        """Schedule push on the running loop without waiting for it."""
        return self._spawn(self.push(), "sync-push")

    def pull_in_background(self) -> asyncio.Task[SyncResult]:
        """Schedule pull on the running loop without waiting for it."""
        return self._spawn(self.pull(), "sync-pull")

    @property
    def pending(self) -> int:
        return len(self._tasks)
