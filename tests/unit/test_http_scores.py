"""
HTTP scores adapter against httpx.MockTransport.
"""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from logic_looper.adapters.http_scores import HttpScoresClient
from logic_looper.components.sync.models import ActivityPayload, SyncRequest, SyncStats
from logic_looper.components.sync.ports import RemoteServerError, RemoteTransportError

API = "http://scores.test/api"


def client_for(handler) -> HttpScoresClient:
    return HttpScoresClient(API, transport=httpx.MockTransport(handler))


def sample_request() -> SyncRequest:
    return SyncRequest(
        scores=[
            ActivityPayload(date="2024-01-01", solved=True, score=300, time_taken=50, difficulty=1, hints_used=0)
        ],
        stats=SyncStats(streak_count=1, total_points=300, puzzles_solved=1, last_played="2024-01-01"),
    )


class TestPushScores:
    def test_posts_body_with_bearer(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"ok": True})

        asyncio.run(client_for(handler).push_scores("tok", sample_request()))

        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == f"{API}/scores/sync"
        assert request.headers["Authorization"] == "Bearer tok"
        body = json.loads(request.content)
        assert body["scores"][0]["timeTaken"] == 50
        assert body["scores"][0]["hintsUsed"] == 0
        assert body["stats"]["last_played"] == "2024-01-01"

    def test_server_error(self) -> None:
        client = client_for(lambda request: httpx.Response(500, text="db down"))
        with pytest.raises(RemoteServerError) as exc_info:
            asyncio.run(client.push_scores("tok", sample_request()))
        assert exc_info.value.status_code == 500

    def test_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(RemoteTransportError):
            asyncio.run(client_for(handler).push_scores("tok", sample_request()))


class TestFetchScores:
    def test_parses_rows(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.headers["Authorization"] == "Bearer tok"
            return httpx.Response(
                200,
                json={"scores": [{"date": "2024-01-02", "score": 120, "time_taken": 80, "difficulty": 2, "hints_used": 1}]},
            )

        rows = asyncio.run(client_for(handler).fetch_scores("tok"))
        assert len(rows) == 1
        assert rows[0].to_activity().time_taken == 80
        assert rows[0].to_activity().solved is True

    def test_missing_scores_key_is_empty(self) -> None:
        rows = asyncio.run(client_for(lambda r: httpx.Response(200, json={})).fetch_scores("tok"))
        assert rows == []

    def test_malformed_body(self) -> None:
        client = client_for(lambda r: httpx.Response(200, json={"scores": [{"date": "2024-01-02"}]}))
        with pytest.raises(RemoteServerError):
            asyncio.run(client.fetch_scores("tok"))

    def test_non_json_body(self) -> None:
        client = client_for(lambda r: httpx.Response(200, text="<html>"))
        with pytest.raises(RemoteServerError):
            asyncio.run(client.fetch_scores("tok"))

    def test_unauthorized(self) -> None:
        client = client_for(lambda r: httpx.Response(401, json={"message": "Invalid token"}))
        with pytest.raises(RemoteServerError) as exc_info:
            asyncio.run(client.fetch_scores("tok"))
        assert exc_info.value.status_code == 401


class TestLeaderboard:
    def test_timeframe_param(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.params["timeframe"] == "week"
            assert "Authorization" not in request.headers
            return httpx.Response(
                200,
                json=[
                    {"user_id": "u1", "display_name": "Ada", "total_score": 900, "puzzles_solved": 4, "rank": 1},
                    {"user_id": "u2", "display_name": None, "total_score": 100, "puzzles_solved": 1, "rank": 2},
                ],
            )

        rows = asyncio.run(client_for(handler).fetch_leaderboard("week"))
        assert [r.rank for r in rows] == [1, 2]
        assert rows[1].display_name is None
