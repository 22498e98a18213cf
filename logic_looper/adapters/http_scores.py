"""
HTTP adapter for the remote scores API.

Implements RemoteScoresPort and LeaderboardPort with httpx.AsyncClient:

    POST {api_url}/scores/sync     bearer token, body SyncRequest
    GET  {api_url}/scores          bearer token, body {"scores": [...]}
    GET  {api_url}/leaderboard     ?timeframe=all|week|today

A request that never gets a response raises RemoteTransportError; a non-2xx
response or an unreadable body raises RemoteServerError.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from logic_looper.components.sync.models import (
    LeaderboardEntry,
    RemoteScore,
    ScoresResponse,
    SyncRequest,
    Timeframe,
)
from logic_looper.components.sync.ports import RemoteServerError, RemoteTransportError

logger = logging.getLogger(__name__)

_LEADERBOARD = TypeAdapter(list[LeaderboardEntry])


class HttpScoresClient:
    def __init__(
        self,
        api_url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_url = api_url
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.api_url, timeout=self.timeout, transport=self._transport)

    @staticmethod
    def _auth(token: str | None) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"} if token else {}

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            async with self._client() as client:
                response = await client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise RemoteTransportError(f"{method} {path}: {exc}") from exc

        if response.is_error:
            raise RemoteServerError(response.status_code, response.text[:200] or response.reason_phrase)
        return response

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise RemoteServerError(response.status_code, "response body is not JSON") from exc

    async def push_scores(self, token: str, request: SyncRequest) -> None:
        # No response body is consumed.
        await self._request("POST", "/scores/sync", json=request.to_wire(), headers=self._auth(token))

    async def fetch_scores(self, token: str) -> list[RemoteScore]:
        response = await self._request("GET", "/scores", headers=self._auth(token))
        data = self._json(response)
        if data is None:
            return []
        try:
            return ScoresResponse.model_validate(data).scores
        except ValidationError as exc:
            raise RemoteServerError(response.status_code, f"malformed scores body: {exc}") from exc

    async def fetch_leaderboard(
        self,
        timeframe: Timeframe = "all",
        *,
        token: str | None = None,
    ) -> list[LeaderboardEntry]:
        response = await self._request(
            "GET", "/leaderboard", params={"timeframe": timeframe}, headers=self._auth(token)
        )
        try:
            return _LEADERBOARD.validate_python(self._json(response))
        except ValidationError as exc:
            raise RemoteServerError(response.status_code, f"malformed leaderboard body: {exc}") from exc
