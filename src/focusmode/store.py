"""
On-device store used when nobody is logged in or the API is unreachable.

One JSON array per collection, written atomically. Entities created here get
an integer id (highest existing id + 1) and a `created_at` timestamp.
"""

import contextlib
import json
import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from focusmode.errors import LocalStorageFailure, NotFoundError
from focusmode.models.base import EntityId

logger = logging.getLogger(__name__)

COLLECTIONS = ("sessions", "notes", "books", "timers")


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def normalize_id(value: Any) -> Any:
    """CLI and URL ids arrive as strings; local ids are ints."""
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return value


class LocalStore:
    def __init__(self, directory: os.PathLike | str):
        self._dir = Path(directory)

    def _path(self, name: str) -> Path:
        if name not in COLLECTIONS:
            raise ValueError(f"Unknown collection: {name}")
        return self._dir / f"{name}.json"

    def _read(self, name: str) -> list[dict[str, Any]]:
        path = self._path(name)
        try:
            data = json.loads(path.read_text())
        except FileNotFoundError:
            return []
        except (OSError, json.JSONDecodeError) as e:
            raise LocalStorageFailure(f"Cannot read {path}: {e}")
        if not isinstance(data, list):
            raise LocalStorageFailure(f"Corrupt collection file {path}")
        return data

    def _write(self, name: str, items: list[dict[str, Any]]) -> None:
        path = self._path(name)
        tmp = None
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self._dir, prefix=f".{name}.", suffix=".tmp")
            with os.fdopen(fd, "w") as fh:
                json.dump(items, fh, indent=2)
            os.replace(tmp, path)
        except (OSError, TypeError, ValueError) as e:
            if tmp is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp)
            raise LocalStorageFailure(f"Cannot write {path}: {e}")

    def get_all(self, name: str) -> list[dict[str, Any]]:
        return self._read(name)

    def get(self, name: str, entity_id: EntityId) -> Optional[dict[str, Any]]:
        entity_id = normalize_id(entity_id)
        for item in self._read(name):
            if item.get("id") == entity_id:
                return item
        return None

    def set(self, name: str, entity: dict[str, Any]) -> dict[str, Any]:
        """Insert when `entity` has no id, otherwise overwrite the record with that id."""
        items = self._read(name)
        record = dict(entity)
        entity_id = normalize_id(record.get("id"))
        if entity_id is None:
            record["id"] = max((i["id"] for i in items if isinstance(i.get("id"), int)), default=0) + 1
            record.setdefault("created_at", now_iso())
            items.append(record)
        else:
            record["id"] = entity_id
            record["updated_at"] = now_iso()
            for index, item in enumerate(items):
                if item.get("id") == entity_id:
                    items[index] = {**item, **record}
                    record = items[index]
                    break
            else:
                record.setdefault("created_at", record["updated_at"])
                items.append(record)
        self._write(name, items)
        logger.debug("stored %s/%s", name, record["id"])
        return record

    def delete(self, name: str, entity_id: EntityId) -> None:
        entity_id = normalize_id(entity_id)
        items = self._read(name)
        kept = [i for i in items if i.get("id") != entity_id]
        if len(kept) == len(items):
            raise NotFoundError(f"{name} {entity_id} not found")
        self._write(name, kept)
