"""Shared fixtures: an in-memory FocusMode API behind httpx.MockTransport."""

import json
import re
from datetime import datetime, timezone

import httpx
import pytest

from focusmode.app import FocusModeApp
from focusmode.context import SessionContext

VALID_TOKEN = "test-token"

DEFAULTS = {
    "sessions": {"description": "", "subject": "", "duration": 25, "status": "planned"},
    "notes": {"category": "study"},
    "books": {"author": "", "description": "", "category": "academic", "is_complete": False},
    "timers": {"completed": False, "task_description": ""},
}


class FakeBackend:
    """Mimics the FocusMode API routes and error bodies."""

    def __init__(self):
        self.tables = {name: [] for name in DEFAULTS}
        self.next_id = 100
        self.requests: list[httpx.Request] = []
        self.down = False
        self.fail_writes = False
        self.users: dict[str, dict] = {}

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def seed(self, table: str, **fields) -> dict:
        self.next_id += 1
        row = {"id": self.next_id, **DEFAULTS[table], **fields}
        row.setdefault("created_at", datetime.now(timezone.utc).isoformat())
        self.tables[table].append(row)
        return row

    def calls(self, method: str, path: str) -> int:
        return sum(1 for r in self.requests if r.method == method and r.url.path == f"/api{path}")

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.down:
            raise httpx.ConnectError("connection refused", request=request)
        path = request.url.path.removeprefix("/api")
        body = json.loads(request.content) if request.content else {}

        if path == "/health":
            return httpx.Response(200, json={"status": "OK", "service": "FocusMode API"})
        if path == "/auth/login":
            user = self.users.get(body.get("email"))
            if not user or user["password"] != body.get("password"):
                return httpx.Response(401, json={"error": "Authentication failed", "message": "Invalid email or password"})
            return httpx.Response(200, json={"message": "Login successful", "user": user["public"], "token": VALID_TOKEN})
        if path == "/auth/register":
            if body.get("email") in self.users:
                return httpx.Response(409, json={"error": "User exists", "message": "User with this email already exists"})
            public = {"id": len(self.users) + 1, "name": body["name"], "email": body["email"], "avatar": body["name"][:1].upper()}
            self.users[body["email"]] = {"password": body["password"], "public": public}
            return httpx.Response(201, json={"message": "User created successfully", "user": public, "token": VALID_TOKEN})

        auth = request.headers.get("authorization", "")
        if not auth:
            return httpx.Response(401, json={"error": "Access token required"})
        if auth != f"Bearer {VALID_TOKEN}":
            return httpx.Response(403, json={"error": "Invalid token"})

        if path == "/stats/today":
            done = [s for s in self.tables["sessions"] if s["status"] == "completed"]
            return httpx.Response(200, json={
                "total_minutes": str(sum(s["duration"] for s in done)),
                "total_sessions": str(len(done)),
            })

        match = re.fullmatch(r"/(sessions|notes|books|timers)(?:/(\d+))?(?:/(\w+))?", path)
        if not match:
            return httpx.Response(404, json={"error": "Not found", "message": f"Route {path} not found"})
        table, entity_id, action = match.group(1), match.group(2), match.group(3)
        rows = self.tables[table]

        if entity_id is None:
            if request.method == "GET":
                ordered = sorted(rows, key=lambda r: r["created_at"], reverse=True)
                return httpx.Response(200, json=ordered)
            if request.method == "POST":
                if self.fail_writes:
                    return httpx.Response(500, json={"error": "Internal server error", "message": "db down"})
                if not body.get("title") and table != "timers":
                    return httpx.Response(400, json={"error": "Validation error", "message": "Title is required"})
                row = self.seed(table, **body)
                return httpx.Response(201, json={"message": "Created", "id": row["id"]})

        row = next((r for r in rows if r["id"] == int(entity_id)), None)
        if row is None:
            return httpx.Response(404, json={"error": "Not found", "message": f"{table} {entity_id} not found"})
        if self.fail_writes:
            return httpx.Response(500, json={"error": "Internal server error", "message": "db down"})
        now = datetime.now(timezone.utc).isoformat()
        if action == "start":
            row.update(status="inprogress", started_at=now)
        elif action == "complete" and table == "sessions":
            row.update(status="completed", completed_at=now, duration=body.get("duration", row["duration"]))
        elif action == "complete":
            row.update(completed=True, completed_at=now)
        elif action == "toggle":
            row["is_complete"] = not row["is_complete"]
        elif request.method == "PUT":
            row.update(body, updated_at=now)
        elif request.method == "DELETE":
            rows.remove(row)
        else:
            return httpx.Response(404, json={"error": "Not found", "message": f"Route {path} not found"})
        return httpx.Response(200, json={"message": "OK"})


class Notifications(list):
    def __call__(self, kind: str, message: str) -> None:
        self.append((kind, message))

    def kinds(self) -> list[str]:
        return [kind for kind, _ in self]


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def notices():
    return Notifications()


@pytest.fixture
def make_app(backend, notices, tmp_path):
    def _make(logged_in: bool) -> FocusModeApp:
        context = SessionContext(token=VALID_TOKEN if logged_in else None)
        return FocusModeApp(
            context,
            base_url="http://focusmode.test",
            data_dir=tmp_path / "data",
            notify=notices,
            transport=backend.transport(),
        )
    return _make


@pytest.fixture
def online_app(make_app):
    return make_app(True)


@pytest.fixture
def offline_app(make_app):
    return make_app(False)
