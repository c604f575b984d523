"""
Dual-source controllers.

Each operation resolves its source once (remote when logged in, local
otherwise), runs against that source and then reloads the whole collection
from it. The in-memory `items` list is only ever replaced by a full reload,
never patched.

Failure policy:
- reads from the API degrade to the local store, with an error notification;
- writes to the API are never redirected to the local store; the failure is
  reported and the collection reloaded;
- LocalStorageFailure propagates, there is nothing left to fall back to.
"""

import logging
from datetime import date, datetime
from enum import Enum
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar

import pydantic

from focusmode.context import SessionContext
from focusmode.errors import (
    FocusModeError,
    InvalidTransition,
    LocalStorageFailure,
    NotFoundError,
    RemoteUnavailable,
    ValidationError,
)
from focusmode.models.base import Entity, EntityId, EntityInput
from focusmode.models.book import Book, BookInput
from focusmode.models.note import Note, NoteInput
from focusmode.models.session import COMPLETED, IN_PROGRESS, SessionInput, StudySession, can_transition
from focusmode.models.stats import TodayStats
from focusmode.models.timer import FocusTimer, TimerInput
from focusmode.repository import EntityRepository
from focusmode.resources import StatsAPI
from focusmode.store import normalize_id, now_iso

logger = logging.getLogger(__name__)

SUCCESS = "success"
ERROR = "error"

Notifier = Callable[[str, str], None]

PAST_TENSE = {
    "create": "created",
    "update": "updated",
    "delete": "deleted",
    "start": "started",
    "complete": "completed",
    "toggle": "updated",
}

E = TypeVar("E", bound=Entity)


class Source(str, Enum):
    REMOTE = "remote"
    LOCAL = "local"


class Outcome(Generic[E]):
    __slots__ = ("ok", "items", "source", "error")

    def __init__(self, ok: bool, items: list[E], source: Optional[Source], error: Optional[FocusModeError] = None):
        self.ok = ok
        self.items = items
        self.source = source
        self.error = error

    def __repr__(self) -> str:
        return f"Outcome(ok={self.ok!r}, source={self.source!r}, items={len(self.items)})"


def _quiet(kind: str, message: str) -> None:
    pass


def validation_error(exc: pydantic.ValidationError) -> ValidationError:
    first = exc.errors()[0]
    field = ".".join(str(p) for p in first.get("loc", ()))
    return ValidationError(f"{field}: {first.get('msg')}" if field else first.get("msg", "Invalid input"))


class EntityController(Generic[E]):
    collection = ""
    label = ""
    model: type[Entity] = Entity
    input_model: type[EntityInput] = EntityInput
    search_fields: tuple[str, ...] = ("title",)

    def __init__(
        self,
        context: SessionContext,
        remote: EntityRepository,
        local: EntityRepository,
        notify: Optional[Notifier] = None,
    ):
        self._context = context
        self._remote = remote
        self._local = local
        self._notify = notify or _quiet
        self.items: list[E] = []
        self.source: Optional[Source] = None

    def resolve(self) -> tuple[Source, EntityRepository]:
        if self._context.is_logged_in():
            return Source.REMOTE, self._remote
        return Source.LOCAL, self._local

    # -- reads ---------------------------------------------------------------

    async def load(self) -> list[E]:
        source, repo = self.resolve()
        return await self._reload(source, repo)

    async def _reload(self, source: Source, repo: EntityRepository) -> list[E]:
        if source is Source.REMOTE:
            try:
                items = self._parse(await repo.list(), source)
            except FocusModeError as e:
                logger.warning("Loading %s from the API failed, using local data: %s", self.collection, e)
                self._notify(ERROR, f"Could not sync {self.collection}, showing local data")
                source = Source.LOCAL
                items = self._parse(await self._local.list(), source)
        else:
            items = self._parse(await repo.list(), source)
        self.items = items
        self.source = source
        return items

    def _parse(self, rows: list[dict[str, Any]], source: Source) -> list[E]:
        try:
            items = [self.model.model_validate(row) for row in rows]
        except pydantic.ValidationError as e:
            if source is Source.LOCAL:
                raise LocalStorageFailure(f"Corrupt {self.collection} record: {e}")
            raise RemoteUnavailable(f"Malformed {self.collection} from the API: {e}")
        # newest first; records without a timestamp go last
        return sorted(items, key=lambda item: item.created_at or "", reverse=True)

    def find(self, entity_id: EntityId) -> Optional[E]:
        wanted = normalize_id(entity_id)
        for item in self.items:
            if normalize_id(item.id) == wanted:
                return item
        return None

    def visible(self, query: Optional[str] = None, **filters: Any) -> list[E]:
        """Filter the loaded collection. A filter value of None or "all" matches everything."""
        items = [
            item for item in self.items
            if all(value in (None, "all") or getattr(item, key, None) == value for key, value in filters.items())
        ]
        if query and query.strip():
            needle = query.strip().lower()
            items = [
                item for item in items
                if any(needle in (getattr(item, f, None) or "").lower() for f in self.search_fields)
            ]
        return items

    # -- writes --------------------------------------------------------------

    def _validate(self, data: dict[str, Any]) -> dict[str, Any]:
        try:
            return self.input_model.model_validate(data).payload()
        except pydantic.ValidationError as e:
            raise validation_error(e)

    async def create(self, data: dict[str, Any]) -> Outcome[E]:
        try:
            payload = self._validate(data)
        except ValidationError as e:
            return self._reject("create", e)
        return await self._mutate("create", lambda repo: repo.create(payload))

    async def update(self, entity_id: EntityId, data: dict[str, Any]) -> Outcome[E]:
        """Change some fields of a loaded entity.

        `data` is laid over the current record and the whole row is sent, so
        omitted fields keep their value.
        """
        try:
            current = self._lookup(entity_id)
            kept = current.model_dump(exclude={"id", "created_at", "updated_at"}, exclude_none=True)
            payload = self._validate({**kept, **data})
            self._check_update(current, payload)
        except FocusModeError as e:
            return self._reject("update", e)
        return await self._mutate("update", lambda repo: repo.update(current.id, payload))

    def _check_update(self, current: E, payload: dict[str, Any]) -> None:
        pass

    async def delete(self, entity_id: EntityId) -> Outcome[E]:
        return await self._mutate("delete", lambda repo: repo.delete(entity_id))

    async def _mutate(self, verb: str, op: Callable[[EntityRepository], Awaitable[Any]]) -> Outcome[E]:
        source, repo = self.resolve()
        try:
            await op(repo)
        except LocalStorageFailure:
            raise
        except FocusModeError as e:
            logger.error("Could not %s %s via %s: %s", verb, self.label, source.value, e)
            self._notify(ERROR, f"Failed to {verb} {self.label}: {e.message}")
            items = await self.load()
            return Outcome(False, items, self.source, e)
        items = await self._reload(source, repo)
        self._notify(SUCCESS, f"{self.label.capitalize()} {PAST_TENSE[verb]}")
        return Outcome(True, items, self.source)

    def _reject(self, verb: str, error: FocusModeError) -> Outcome[E]:
        """Refuse an operation before anything is dispatched."""
        logger.info("Rejected %s %s: %s", verb, self.label, error)
        self._notify(ERROR, f"Failed to {verb} {self.label}: {error.message}")
        return Outcome(False, self.items, self.source, error)

    def _lookup(self, entity_id: EntityId) -> E:
        entity = self.find(entity_id)
        if entity is None:
            raise NotFoundError(f"{self.label.capitalize()} {entity_id} not found")
        return entity

    async def _transition(
        self,
        entity_id: EntityId,
        action: str,
        changes: dict[str, Any],
        body: Optional[dict[str, Any]] = None,
    ) -> Outcome[E]:
        return await self._mutate(action, lambda repo: repo.transition(entity_id, action, changes, body))


class SessionController(EntityController[StudySession]):
    collection = "sessions"
    label = "session"
    model = StudySession
    input_model = SessionInput
    search_fields = ("title", "subject", "description")

    def _check_update(self, current: StudySession, payload: dict[str, Any]) -> None:
        # status moves only through start/complete
        target = payload.get("status", current.status)
        if target != current.status:
            raise InvalidTransition(current.status, target)

    async def start(self, session_id: EntityId) -> Outcome[StudySession]:
        return await self._advance(session_id, IN_PROGRESS, "start", "started_at")

    async def complete(self, session_id: EntityId) -> Outcome[StudySession]:
        return await self._advance(session_id, COMPLETED, "complete", "completed_at")

    async def _advance(self, session_id: EntityId, target: str, action: str, stamp: str) -> Outcome[StudySession]:
        try:
            session = self._lookup(session_id)
            if not can_transition(session.status, target):
                raise InvalidTransition(session.status, target)
        except FocusModeError as e:
            return self._reject(action, e)
        body = {"duration": session.duration} if target == COMPLETED else None
        return await self._transition(session.id, action, {"status": target, stamp: now_iso()}, body)


class NoteController(EntityController[Note]):
    collection = "notes"
    label = "note"
    model = Note
    input_model = NoteInput
    search_fields = ("title", "content")


class BookController(EntityController[Book]):
    collection = "books"
    label = "book"
    model = Book
    input_model = BookInput
    search_fields = ("title", "author", "description")

    async def toggle(self, book_id: EntityId) -> Outcome[Book]:
        try:
            book = self._lookup(book_id)
        except NotFoundError as e:
            return self._reject("toggle", e)
        return await self._transition(book.id, "toggle", {"is_complete": not book.is_complete})


class TimerController(EntityController[FocusTimer]):
    collection = "timers"
    label = "timer"
    model = FocusTimer
    input_model = TimerInput
    search_fields = ("task_description",)

    async def start(self, data: dict[str, Any]) -> Outcome[FocusTimer]:
        """Create a running timer."""
        try:
            payload = self._validate(data)
        except ValidationError as e:
            return self._reject("start", e)
        payload["started_at"] = now_iso()
        return await self._mutate("start", lambda repo: repo.create(payload))

    async def complete(self, timer_id: EntityId) -> Outcome[FocusTimer]:
        try:
            timer = self._lookup(timer_id)
            if timer.completed:
                raise InvalidTransition("completed", "completed")
        except FocusModeError as e:
            return self._reject("complete", e)
        return await self._transition(timer.id, "complete", {"completed": True, "completed_at": now_iso()})


def _created_on(value: Optional[str], day: date) -> bool:
    if not value:
        return False
    try:
        stamp = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return False
    if stamp.tzinfo is not None:
        stamp = stamp.astimezone()
    return stamp.date() == day


def summarize_today(rows: list[dict[str, Any]], today: Optional[date] = None) -> TodayStats:
    """Completed sessions created today, as the API's /stats/today counts them."""
    day = today or date.today()
    done = [r for r in rows if r.get("status") == COMPLETED and _created_on(r.get("created_at"), day)]
    return TodayStats(
        total_minutes=sum(int(r.get("duration") or 0) for r in done),
        total_sessions=len(done),
    )


class StatsController:
    def __init__(
        self,
        context: SessionContext,
        api: StatsAPI,
        local_sessions: EntityRepository,
        notify: Optional[Notifier] = None,
    ):
        self._context = context
        self._api = api
        self._local_sessions = local_sessions
        self._notify = notify or _quiet
        self.source: Optional[Source] = None

    async def today(self) -> TodayStats:
        if self._context.is_logged_in():
            try:
                stats = TodayStats.model_validate(await self._api.today())
            except FocusModeError as e:
                logger.warning("Loading today's stats from the API failed, using local data: %s", e)
                self._notify(ERROR, "Could not sync stats, showing local data")
            except pydantic.ValidationError as e:
                logger.warning("Malformed stats from the API, using local data: %s", e)
                self._notify(ERROR, "Could not sync stats, showing local data")
            else:
                self.source = Source.REMOTE
                return stats
        self.source = Source.LOCAL
        return summarize_today(await self._local_sessions.list())
