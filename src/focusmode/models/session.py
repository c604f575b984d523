"""
Study session models.

Lifecycle: planned -> inprogress -> completed, one-directional.
"""

from typing import Optional

from pydantic import Field

from focusmode.models.base import Entity, EntityInput

PLANNED = "planned"
IN_PROGRESS = "inprogress"
COMPLETED = "completed"

STATUSES = (PLANNED, IN_PROGRESS, COMPLETED)

# status -> status it may move to
TRANSITIONS = {PLANNED: IN_PROGRESS, IN_PROGRESS: COMPLETED}


class StudySession(Entity):
    title: str = ""
    subject: Optional[str] = ""
    description: Optional[str] = ""
    duration: int = 25
    status: str = PLANNED
    started_at: Optional[str] = None
    completed_at: Optional[str] = None


class SessionInput(EntityInput):
    title: str = Field(min_length=1)
    subject: str = ""
    description: str = ""
    duration: int = Field(default=25, gt=0)
    status: str = Field(default=PLANNED, pattern=f"^({'|'.join(STATUSES)})$")


def can_transition(current: str, target: str) -> bool:
    return TRANSITIONS.get(current) == target
