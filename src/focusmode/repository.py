"""
EntityRepository — the list/create/update/delete/transition capability
shared by the remote API and the local store.
"""

from __future__ import annotations

import asyncio
from typing import Any, Optional, Protocol

from focusmode.errors import NotFoundError
from focusmode.models.base import EntityId
from focusmode.resources import ResourceAPI
from focusmode.store import LocalStore, normalize_id


class EntityRepository(Protocol):
    async def list(self) -> list[dict[str, Any]]: ...

    async def create(self, data: dict[str, Any]) -> Any: ...

    async def update(self, entity_id: EntityId, data: dict[str, Any]) -> Any: ...

    async def delete(self, entity_id: EntityId) -> None: ...

    async def transition(
        self,
        entity_id: EntityId,
        action: str,
        changes: dict[str, Any],
        body: Optional[dict[str, Any]] = None,
    ) -> Any:
        """Move an entity to a new state.

        The remote side calls the API method named `action`, passing `body` as
        keyword arguments; the server computes the new fields. The local side
        applies `changes`.
        """
        ...


class RemoteRepository:
    def __init__(self, api: ResourceAPI):
        self._api = api

    async def list(self) -> list[dict[str, Any]]:
        return await self._api.get_all()

    async def create(self, data: dict[str, Any]) -> Any:
        return await self._api.create(data)

    async def update(self, entity_id: EntityId, data: dict[str, Any]) -> Any:
        return await self._api.update(entity_id, data)

    async def delete(self, entity_id: EntityId) -> None:
        await self._api.delete(entity_id)

    async def transition(
        self,
        entity_id: EntityId,
        action: str,
        changes: dict[str, Any],
        body: Optional[dict[str, Any]] = None,
    ) -> Any:
        # SessionsAPI.start, SessionsAPI.complete, BooksAPI.toggle, TimersAPI.complete
        return await getattr(self._api, action)(entity_id, **(body or {}))


class LocalRepository:
    def __init__(self, store: LocalStore, collection: str):
        self._store = store
        self._collection = collection

    async def list(self) -> list[dict[str, Any]]:
        return await asyncio.to_thread(self._store.get_all, self._collection)

    async def create(self, data: dict[str, Any]) -> Any:
        record = {k: v for k, v in data.items() if k != "id"}
        return await asyncio.to_thread(self._store.set, self._collection, record)

    async def update(self, entity_id: EntityId, data: dict[str, Any]) -> Any:
        return await self._patch(entity_id, data)

    async def delete(self, entity_id: EntityId) -> None:
        await asyncio.to_thread(self._store.delete, self._collection, entity_id)

    async def transition(
        self,
        entity_id: EntityId,
        action: str,
        changes: dict[str, Any],
        body: Optional[dict[str, Any]] = None,
    ) -> Any:
        return await self._patch(entity_id, changes)

    async def _patch(self, entity_id: EntityId, changes: dict[str, Any]) -> dict[str, Any]:
        existing = await asyncio.to_thread(self._store.get, self._collection, entity_id)
        if existing is None:
            raise NotFoundError(f"{self._collection} {entity_id} not found")
        record = {**existing, **changes, "id": normalize_id(entity_id)}
        return await asyncio.to_thread(self._store.set, self._collection, record)
