"""
FocusModeClient — async client for the FocusMode API.
"""

from typing import Any, Optional

import httpx

from focusmode.auth import Auth
from focusmode.config import DEFAULT_BASE_URL
from focusmode.context import SessionContext
from focusmode.resources import BooksAPI, NotesAPI, SessionsAPI, StatsAPI, TimersAPI
from focusmode.transport.http import HttpClient


class FocusModeClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        context: Optional[SessionContext] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0,
    ):
        self.context = context or SessionContext()
        self.http = HttpClient(base_url=base_url, token=self.context.token, transport=transport, timeout=timeout)
        self.auth = Auth(self.http, self.context)
        self.sessions = SessionsAPI(self.http)
        self.notes = NotesAPI(self.http)
        self.books = BooksAPI(self.http)
        self.timers = TimersAPI(self.http)
        self.stats = StatsAPI(self.http)

    async def health(self) -> dict[str, Any]:
        return await self.http.get("/health", authenticated=False)

    async def close(self) -> None:
        await self.http.close()

    async def __aenter__(self) -> "FocusModeClient":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()
