"""Canonical DetectionEvent model.

A DetectionEvent is one item the cutting-line camera reported: when it
was seen, how big it was, and how sure the detector was.  Raw feed
records are normalised into this model by the EventValidator; nothing
downstream ever sees an unvalidated record.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from cutline_analytics.domain.enums import SizeCategory
from cutline_analytics.foundation.clock import seconds_to_hms


class DetectionEvent(BaseModel):
    """A single detection, immutable after creation."""

    id: str = Field(..., min_length=1, description="Unique within a session")
    time_offset: int = Field(..., ge=0, description="Elapsed seconds since session start")
    absolute_timestamp: Optional[str] = Field(
        default=None,
        description="Absolute instant as supplied by the feed, kept verbatim",
    )
    size: SizeCategory
    confidence: float = Field(..., ge=0.0, le=1.0)
    source: str = Field(..., description="Free-text origin label")

    model_config = {"frozen": True}

    @property
    def time(self) -> str:
        """The offset rendered as ``HH:MM:SS``."""
        return seconds_to_hms(self.time_offset)
