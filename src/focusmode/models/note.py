"""
Note models.
"""

from pydantic import Field

from focusmode.models.base import Entity, EntityInput


class Note(Entity):
    title: str = ""
    content: str = ""
    category: str = "study"


class NoteInput(EntityInput):
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)
    category: str = "study"
