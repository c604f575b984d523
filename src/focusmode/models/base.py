"""
Shared pieces of the entity models.
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, field_validator

MAX_TEXT_LENGTH = 500

EntityId = Union[int, str]


def sanitize(value: Any) -> Any:
    """Trim and cap free text the same way the API does."""
    if not isinstance(value, str):
        return value
    return value.strip()[:MAX_TEXT_LENGTH]


class Entity(BaseModel):
    """A persisted record. Servers return whole rows, so unknown fields are kept."""

    id: EntityId
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    model_config = {"extra": "allow"}


class EntityInput(BaseModel):
    """User-submitted fields, validated before dispatch."""

    model_config = {"extra": "ignore"}

    @field_validator("*", mode="before")
    @classmethod
    def _sanitize(cls, value: Any) -> Any:
        return sanitize(value)

    def payload(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
