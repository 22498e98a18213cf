"""
Sync component - Best-effort reconciliation with the remote scores store.
"""

from .component import SyncReconciler, build_sync_request, merge_remote_scores
from .models import (
    ActivityPayload,
    LeaderboardEntry,
    RemoteScore,
    ScoresResponse,
    SyncRequest,
    SyncResult,
    SyncStats,
    SyncStatus,
    Timeframe,
)
from .ports import (
    CredentialPort,
    LeaderboardPort,
    RemoteError,
    RemoteScoresPort,
    RemoteServerError,
    RemoteTransportError,
    SyncClockPort,
)

__all__ = [
    # Component
    "SyncReconciler",
    "build_sync_request",
    "merge_remote_scores",
    # Models
    "ActivityPayload",
    "LeaderboardEntry",
    "RemoteScore",
    "ScoresResponse",
    "SyncRequest",
    "SyncResult",
    "SyncStats",
    "SyncStatus",
    "Timeframe",
    # Ports
    "CredentialPort",
    "LeaderboardPort",
    "RemoteScoresPort",
    "SyncClockPort",
    # Errors
    "RemoteError",
    "RemoteServerError",
    "RemoteTransportError",
]
