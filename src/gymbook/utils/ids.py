"""Identifier generation."""

from uuid import uuid4


def new_id() -> str:
    """Return a fresh unique identifier for an entity."""
    return str(uuid4())
