"""HTTP client: error mapping, bearer auth and login flow."""

import httpx
import pytest

from focusmode.client import FocusModeClient
from focusmode.context import SessionContext
from focusmode.errors import AuthRequired, NotFoundError, RemoteUnavailable, ValidationError
from focusmode.repository import RemoteRepository
from focusmode.transport.http import HttpClient

from conftest import VALID_TOKEN


def _client(handler, token=VALID_TOKEN) -> HttpClient:
    return HttpClient(base_url="http://focusmode.test", token=token, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
@pytest.mark.parametrize("status,error", [
    (400, ValidationError),
    (401, AuthRequired),
    (403, AuthRequired),
    (404, NotFoundError),
    (409, ValidationError),
    (500, RemoteUnavailable),
    (502, RemoteUnavailable),
])
async def test_status_mapping(status, error):
    http = _client(lambda request: httpx.Response(status, json={"error": "Nope", "message": "went wrong"}))
    with pytest.raises(error) as info:
        await http.get("/sessions")
    assert info.value.status == status
    assert info.value.message == "went wrong"


@pytest.mark.asyncio
async def test_non_json_error_body():
    http = _client(lambda request: httpx.Response(502, text="Bad gateway"))
    with pytest.raises(RemoteUnavailable, match="HTTP 502"):
        await http.get("/sessions")


@pytest.mark.asyncio
async def test_transport_error_is_remote_unavailable():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(RemoteUnavailable):
        await _client(refuse).get("/sessions")


@pytest.mark.asyncio
async def test_bearer_header_and_api_prefix():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=[])

    assert await _client(handler).get("/sessions") == []
    assert seen[0].url.path == "/api/sessions"
    assert seen[0].headers["authorization"] == f"Bearer {VALID_TOKEN}"


@pytest.mark.asyncio
async def test_missing_token_fails_before_request():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=[])

    with pytest.raises(AuthRequired):
        await _client(handler, token=None).get("/sessions")
    assert seen == []


@pytest.mark.asyncio
async def test_login_stores_token_in_context(backend):
    backend.users["ana@example.com"] = {
        "password": "secret1",
        "public": {"id": 7, "name": "Ana", "email": "ana@example.com", "avatar": "A"},
    }
    context = SessionContext()
    client = FocusModeClient(base_url="http://focusmode.test", context=context, transport=backend.transport())
    assert not client.auth.is_logged_in()

    await client.auth.login("  Ana@Example.com ", "secret1")

    assert client.auth.is_logged_in()
    assert context.user.name == "Ana"
    assert await client.sessions.get_all() == []

    client.auth.logout()
    assert not client.auth.is_logged_in()
    await client.close()


@pytest.mark.asyncio
async def test_login_rejected(backend):
    client = FocusModeClient(base_url="http://focusmode.test", transport=backend.transport())
    with pytest.raises(AuthRequired, match="Invalid email or password"):
        await client.auth.login("nobody@example.com", "secret1")
    assert not client.auth.is_logged_in()


@pytest.mark.asyncio
async def test_register_validates_before_dispatch(backend):
    client = FocusModeClient(base_url="http://focusmode.test", transport=backend.transport())
    with pytest.raises(ValidationError, match="email"):
        await client.auth.register("Ana", "not-an-email", "secret1")
    with pytest.raises(ValidationError, match="at least 6"):
        await client.auth.register("Ana", "ana@example.com", "123")
    assert backend.requests == []


@pytest.mark.asyncio
async def test_register_duplicate_email(backend):
    client = FocusModeClient(base_url="http://focusmode.test", transport=backend.transport())
    result = await client.auth.register("Ana", "ana@example.com", "secret1")
    assert result["user"]["avatar"] == "A"
    with pytest.raises(ValidationError) as info:
        await client.auth.register("Ana", "ana@example.com", "secret1")
    assert info.value.status == 409


@pytest.mark.asyncio
async def test_health(backend):
    client = FocusModeClient(base_url="http://focusmode.test", transport=backend.transport())
    assert (await client.health())["status"] == "OK"


@pytest.mark.asyncio
async def test_resource_routes(backend):
    client = FocusModeClient(
        base_url="http://focusmode.test",
        context=SessionContext(token=VALID_TOKEN),
        transport=backend.transport(),
    )
    created = await client.sessions.create({"title": "Math", "duration": 30})
    await client.sessions.start(created["id"])
    await client.sessions.complete(created["id"], 30)
    assert backend.tables["sessions"][0]["status"] == "completed"

    book = await client.books.create({"title": "SICP"})
    await client.books.toggle(book["id"])
    assert backend.tables["books"][0]["is_complete"] is True

    timer = await client.timers.create({"duration": 25})
    await client.timers.complete(timer["id"])
    assert backend.tables["timers"][0]["completed"] is True

    with pytest.raises(NotFoundError):
        await client.sessions.delete(424242)
    await client.close()


@pytest.mark.asyncio
async def test_remote_transitions_use_named_routes(backend):
    client = FocusModeClient(
        base_url="http://focusmode.test",
        context=SessionContext(token=VALID_TOKEN),
        transport=backend.transport(),
    )
    session = backend.seed("sessions", title="Math", duration=25)
    timer = backend.seed("timers", duration=25)
    sessions = RemoteRepository(client.sessions)

    await sessions.transition(session["id"], "start", {"status": "inprogress"})
    await sessions.transition(session["id"], "complete", {"status": "completed"}, {"duration": 40})
    await RemoteRepository(client.timers).transition(timer["id"], "complete", {"completed": True})

    assert backend.calls("POST", f"/sessions/{session['id']}/start") == 1
    assert backend.calls("POST", f"/sessions/{session['id']}/complete") == 1
    assert backend.tables["sessions"][0]["duration"] == 40
    assert backend.tables["timers"][0]["completed"] is True
    await client.close()
