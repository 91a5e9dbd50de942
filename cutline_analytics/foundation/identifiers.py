"""ID generation for sessions and detection events."""

from __future__ import annotations

from uuid import uuid4, UUID


def new_id() -> UUID:
    """Generate a new random UUID v4 for sessions."""
    return uuid4()


def event_id(position: int) -> str:
    """Event id for a 1-based position within a session, e.g. ``EVT-0007``."""
    return f"EVT-{position:04d}"
