"""
Book models.
"""

from typing import Optional

from pydantic import Field

from focusmode.models.base import Entity, EntityInput


class Book(Entity):
    title: str = ""
    author: Optional[str] = ""
    description: Optional[str] = ""
    category: str = "academic"
    is_complete: bool = False


class BookInput(EntityInput):
    title: str = Field(min_length=1)
    author: str = ""
    description: str = ""
    category: str = "academic"
    is_complete: Optional[bool] = None
