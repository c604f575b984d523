"""
REST resource APIs — one per entity type.

Every route needs a bearer token; a missing token fails with AuthRequired
before any request is sent.
"""

from __future__ import annotations

from typing import Any, Optional

from focusmode.models.base import EntityId
from focusmode.transport.http import HttpClient


class ResourceAPI:
    path = ""

    def __init__(self, http: HttpClient):
        self._http = http

    async def get_all(self) -> list[dict[str, Any]]:
        """GET /{resource}, newest first."""
        return await self._http.get(self.path) or []

    async def create(self, data: dict[str, Any]) -> dict[str, Any]:
        """POST /{resource}. Returns {message, id}."""
        return await self._http.post(self.path, data)

    async def update(self, entity_id: EntityId, data: dict[str, Any]) -> Any:
        return await self._http.put(f"{self.path}/{entity_id}", data)

    async def delete(self, entity_id: EntityId) -> Any:
        return await self._http.delete(f"{self.path}/{entity_id}")

    async def action(self, entity_id: EntityId, name: str, body: Optional[dict[str, Any]] = None) -> Any:
        """POST /{resource}/{id}/{name}: server-side state transitions."""
        return await self._http.post(f"{self.path}/{entity_id}/{name}", body)


class SessionsAPI(ResourceAPI):
    path = "/sessions"

    async def start(self, session_id: EntityId) -> Any:
        return await self.action(session_id, "start")

    async def complete(self, session_id: EntityId, duration: int) -> Any:
        return await self.action(session_id, "complete", {"duration": duration})


class NotesAPI(ResourceAPI):
    path = "/notes"


class BooksAPI(ResourceAPI):
    path = "/books"

    async def toggle(self, book_id: EntityId) -> Any:
        return await self.action(book_id, "toggle")


class TimersAPI(ResourceAPI):
    path = "/timers"

    async def complete(self, timer_id: EntityId) -> Any:
        return await self.action(timer_id, "complete")


class StatsAPI:
    def __init__(self, http: HttpClient):
        self._http = http

    async def today(self) -> dict[str, Any]:
        """GET /stats/today: {total_minutes, total_sessions}."""
        return await self._http.get("/stats/today")
