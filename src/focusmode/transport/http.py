"""
REST HTTP client for the FocusMode API.

Non-2xx responses carry `{error, message}` and are mapped onto the
FocusMode error hierarchy.
"""

from typing import Any, Optional

import httpx

from focusmode.config import DEFAULT_BASE_URL
from focusmode.errors import (
    AuthRequired,
    FocusModeError,
    NotFoundError,
    RemoteUnavailable,
    ValidationError,
)


def error_from_response(resp: httpx.Response) -> FocusModeError:
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        message = body.get("message") or body.get("error") or resp.reason_phrase
    else:
        message = f"HTTP {resp.status_code}: {resp.text[:200]}"
    status = resp.status_code
    if status in (401, 403):
        return AuthRequired(message, status=status)
    if status == 404:
        return NotFoundError(message, status=status)
    if status in (400, 409):
        return ValidationError(message, details=body if isinstance(body, dict) else None, status=status)
    return RemoteUnavailable(message, status=status)


class HttpClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0,
    ):
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._client = httpx.AsyncClient(
            base_url=f"{self._base_url}/api",
            headers={"User-Agent": "focusmode-client/0.1.0", "Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    @property
    def token(self) -> Optional[str]:
        return self._token

    def set_token(self, token: Optional[str]) -> None:
        self._token = token

    def _auth_headers(self, authenticated: bool) -> dict[str, str]:
        headers: dict[str, str] = {"Content-Type": "application/json"}
        if authenticated:
            if not self._token:
                raise AuthRequired()
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def request(
        self,
        method: str,
        path: str,
        body: Optional[dict[str, Any]] = None,
        params: Optional[dict[str, str]] = None,
        authenticated: bool = True,
    ) -> Any:
        headers = self._auth_headers(authenticated)
        try:
            resp = await self._client.request(method, path, json=body, params=params, headers=headers)
        except httpx.TimeoutException as e:
            raise RemoteUnavailable(f"Request to {path} timed out: {e}")
        except httpx.TransportError as e:
            raise RemoteUnavailable(f"Request to {path} failed: {e}")
        if resp.status_code >= 400:
            raise error_from_response(resp)
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError:
            raise RemoteUnavailable(f"Invalid JSON from {path}", status=resp.status_code)

    async def get(self, path: str, params: Optional[dict[str, str]] = None, authenticated: bool = True) -> Any:
        return await self.request("GET", path, params=params, authenticated=authenticated)

    async def post(self, path: str, body: Optional[dict[str, Any]] = None, authenticated: bool = True) -> Any:
        return await self.request("POST", path, body=body, authenticated=authenticated)

    async def put(self, path: str, body: Optional[dict[str, Any]] = None, authenticated: bool = True) -> Any:
        return await self.request("PUT", path, body=body, authenticated=authenticated)

    async def delete(self, path: str, authenticated: bool = True) -> Any:
        return await self.request("DELETE", path, authenticated=authenticated)

    async def close(self) -> None:
        await self._client.aclose()
