"""
Auth module — register / login against the FocusMode API.

The token returned by the server is kept in the SessionContext, which is
what every controller asks before choosing a source.
"""

import re
from typing import Any

from focusmode.context import SessionContext
from focusmode.errors import ValidationError
from focusmode.models.base import sanitize
from focusmode.models.stats import User
from focusmode.transport.http import HttpClient

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6


def _check_credentials(email: str, password: str) -> None:
    if not EMAIL_RE.match(email):
        raise ValidationError("Invalid email format")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")


class Auth:
    def __init__(self, http: HttpClient, context: SessionContext):
        self._http = http
        self._context = context

    def is_logged_in(self) -> bool:
        return self._context.is_logged_in()

    async def register(self, name: str, email: str, password: str) -> dict[str, Any]:
        """Create an account and sign in with the returned token."""
        if not name or not email or not password:
            raise ValidationError("All fields are required")
        name, email, password = sanitize(name), sanitize(email).lower(), sanitize(password)
        _check_credentials(email, password)
        result = await self._http.post(
            "/auth/register",
            {"name": name, "email": email, "password": password},
            authenticated=False,
        )
        self._accept(result)
        return result

    async def login(self, email: str, password: str) -> dict[str, Any]:
        if not email or not password:
            raise ValidationError("Email and password are required")
        email, password = sanitize(email).lower(), sanitize(password)
        result = await self._http.post("/auth/login", {"email": email, "password": password}, authenticated=False)
        self._accept(result)
        return result

    def logout(self) -> None:
        self._http.set_token(None)
        self._context.sign_out()

    def _accept(self, result: dict[str, Any]) -> None:
        user = result.get("user")
        self._http.set_token(result["token"])
        self._context.sign_in(result["token"], User.model_validate(user) if user else None)
