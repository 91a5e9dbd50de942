"""Session: one bounded snapshot of detection events.

A Session is created once per ingestion (feed or synthetic) and is never
mutated afterwards.  Re-ingestion produces a brand new Session with a new
``session_id``; every derived view is recomputed from it.

Acquisition results are an explicit two-branch type: ``Acquired`` carries
a Session, ``Unavailable`` carries the reason the feed could not be used.
"""

from __future__ import annotations

from datetime import datetime
from typing import Union
from uuid import UUID

from pydantic import BaseModel, Field

from cutline_analytics.domain.enums import SessionOrigin
from cutline_analytics.domain.event import DetectionEvent
from cutline_analytics.foundation.clock import utc_now
from cutline_analytics.foundation.identifiers import new_id


class Session(BaseModel):
    session_id: UUID = Field(default_factory=new_id)
    name: str = Field(..., description="Session identifier; also seeds the synthetic fallback")
    origin: SessionOrigin
    events: tuple[DetectionEvent, ...] = ()
    duration_minutes: int = Field(default=60, gt=0)
    created_at: datetime = Field(default_factory=utc_now)

    model_config = {"frozen": True}

    @property
    def duration_seconds(self) -> int:
        return self.duration_minutes * 60

    @property
    def event_count(self) -> int:
        return len(self.events)

    def summary(self) -> dict:
        return {
            "session_id": str(self.session_id),
            "name": self.name,
            "origin": self.origin.value,
            "event_count": self.event_count,
            "duration_minutes": self.duration_minutes,
            "created_at": self.created_at.isoformat(),
        }


class Acquired(BaseModel):
    """The feed was reachable and produced at least one valid event."""

    session: Session

    model_config = {"frozen": True}


class Unavailable(BaseModel):
    """The feed could not be used; the caller substitutes synthetic data."""

    reason: str

    model_config = {"frozen": True}


AcquisitionResult = Union[Acquired, Unavailable]
