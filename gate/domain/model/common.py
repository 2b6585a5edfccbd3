"""Shared base for domain entities."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Immutable domain entity.

    State changes go through ``model_copy(update=...)`` in the repositories,
    so a loaded entity never changes under a caller.
    """

    model_config = ConfigDict(frozen=True)


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)
