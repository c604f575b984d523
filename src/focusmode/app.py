"""
FocusModeApp — one context, one API client, one local store and a
controller per entity type.
"""

import os
from typing import Any, Optional

import httpx

from focusmode import config
from focusmode.client import FocusModeClient
from focusmode.context import SessionContext
from focusmode.controller import (
    BookController,
    NoteController,
    Notifier,
    SessionController,
    StatsController,
    TimerController,
)
from focusmode.repository import LocalRepository, RemoteRepository
from focusmode.store import LocalStore


class FocusModeApp:
    def __init__(
        self,
        context: SessionContext,
        base_url: str = config.DEFAULT_BASE_URL,
        data_dir: Optional[os.PathLike | str] = None,
        notify: Optional[Notifier] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.context = context
        self.client = FocusModeClient(base_url=base_url, context=context, transport=transport)
        self.store = LocalStore(data_dir if data_dir is not None else config.data_dir())

        def pair(api: Any, collection: str) -> tuple[RemoteRepository, LocalRepository]:
            return RemoteRepository(api), LocalRepository(self.store, collection)

        self.sessions = SessionController(context, *pair(self.client.sessions, "sessions"), notify=notify)
        self.notes = NoteController(context, *pair(self.client.notes, "notes"), notify=notify)
        self.books = BookController(context, *pair(self.client.books, "books"), notify=notify)
        self.timers = TimerController(context, *pair(self.client.timers, "timers"), notify=notify)
        self.stats = StatsController(
            context, self.client.stats, LocalRepository(self.store, "sessions"), notify=notify,
        )

    @classmethod
    def from_config(cls, notify: Optional[Notifier] = None, **kwargs: Any) -> "FocusModeApp":
        cfg = config.load_config()
        kwargs.setdefault("base_url", config.base_url(cfg))
        return cls(SessionContext.from_config(cfg), notify=notify, **kwargs)

    @property
    def auth(self):
        return self.client.auth

    async def close(self) -> None:
        await self.client.close()

    async def __aenter__(self) -> "FocusModeApp":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()
