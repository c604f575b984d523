"""
Session context — who is logged in, threaded explicitly into the client
and the controllers instead of being read from a global.
"""

import base64
import json
import time
from typing import Any, Optional

from focusmode import config
from focusmode.models.stats import User


def token_expiry(token: str) -> Optional[float]:
    """Read the `exp` claim of a JWT without verifying it. None if absent or unreadable."""
    parts = token.split(".")
    if len(parts) != 3:
        return None
    segment = parts[1] + "=" * (-len(parts[1]) % 4)
    try:
        claims = json.loads(base64.urlsafe_b64decode(segment))
    except (ValueError, TypeError):
        return None
    exp = claims.get("exp") if isinstance(claims, dict) else None
    return float(exp) if isinstance(exp, (int, float)) else None


class SessionContext:
    def __init__(self, token: Optional[str] = None, user: Optional[User] = None, persist: bool = False):
        self.token = token
        self.user = user
        self._persist = persist

    @classmethod
    def from_config(cls, cfg: Optional[dict[str, Any]] = None) -> "SessionContext":
        cfg = config.load_config() if cfg is None else cfg
        user = cfg.get("user")
        return cls(
            token=cfg.get("access_token"),
            user=User.model_validate(user) if user else None,
            persist=True,
        )

    def is_logged_in(self, now: Optional[float] = None) -> bool:
        if not self.token:
            return False
        exp = token_expiry(self.token)
        if exp is None:
            return True
        return exp > (time.time() if now is None else now)

    def sign_in(self, token: str, user: Optional[User]) -> None:
        self.token = token
        self.user = user
        self._save()

    def sign_out(self) -> None:
        self.token = None
        self.user = None
        self._save()

    def _save(self) -> None:
        if not self._persist:
            return
        cfg = config.load_config()
        cfg.pop("access_token", None)
        cfg.pop("user", None)
        if self.token:
            cfg["access_token"] = self.token
            cfg["user"] = self.user.model_dump() if self.user else None
        config.save_config(cfg)
