"""
Statistics and user models.
"""

from typing import Optional

from pydantic import BaseModel

from focusmode.models.base import EntityId


class TodayStats(BaseModel):
    """Completed sessions created today."""
    total_minutes: int = 0
    total_sessions: int = 0


class User(BaseModel):
    id: EntityId
    name: str = ""
    email: str = ""
    avatar: Optional[str] = None
