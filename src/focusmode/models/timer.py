"""
Focus timer models.
"""

from typing import Optional

from pydantic import Field

from focusmode.models.base import Entity, EntityInput


class FocusTimer(Entity):
    timer_type: Optional[str] = None
    duration: Optional[int] = None
    completed: bool = False
    task_description: Optional[str] = ""
    started_at: Optional[str] = None
    completed_at: Optional[str] = None


class TimerInput(EntityInput):
    timer_type: str = "pomodoro"
    duration: int = Field(default=25, gt=0)
    task_description: str = ""
