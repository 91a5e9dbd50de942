"""EventValidator: normalises loosely-typed feed records into DetectionEvents.

Expected raw format (every field optional except ``size``):
{
    "id": "EVT-0001",
    "time": "00:03:12",
    "timestamp": "2024-01-01T10:03:12Z",
    "size": "Large",
    "confidence": 0.93,
    "source": "Cutting Table 1"
}

Rules:
    1. The raw record is never mutated.
    2. ``size`` must be one of the four category strings (case-sensitive);
       anything else drops the record, it is never coerced.
    3. Every other field has a default, so only ``size`` can reject.
    4. Rejections are counted and logged, never raised to the caller.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Iterable, Mapping

from cutline_analytics.config import settings
from cutline_analytics.domain.enums import SizeCategory
from cutline_analytics.domain.event import DetectionEvent
from cutline_analytics.foundation.clock import hms_to_seconds
from cutline_analytics.foundation.identifiers import event_id
from cutline_analytics.foundation.numeric import clamp

logger = logging.getLogger(__name__)

TIMESTAMP_ALIASES: tuple[str, ...] = ("timestamp", "datetime", "dateTime")

_CATEGORY_BY_VALUE = {c.value: c for c in SizeCategory}


class ValidatorStats:
    """Accept/reject counters for observability."""

    __slots__ = ("accepted_count", "rejected_count")

    def __init__(self) -> None:
        self.accepted_count: int = 0
        self.rejected_count: int = 0

    def to_dict(self) -> dict:
        return {
            "accepted_count": self.accepted_count,
            "rejected_count": self.rejected_count,
        }


def _read_confidence(value: Any, default: float) -> float:
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return clamp(number, 0.0, 1.0)


def _read_timestamp(raw: Mapping[str, Any]) -> str | None:
    for key in TIMESTAMP_ALIASES:
        value = raw.get(key)
        if value is not None:
            return str(value)
    return None


class EventValidator:
    """Maps raw feed records to canonical DetectionEvents.

    Usage:
        validator = EventValidator()
        events = validator.validate(document["events"])
    """

    def __init__(
        self,
        default_source: str | None = None,
        default_confidence: float | None = None,
    ) -> None:
        self._default_source = default_source or settings.default_source
        self._default_confidence = (
            settings.default_confidence if default_confidence is None else default_confidence
        )
        self.stats = ValidatorStats()

    def normalize(self, raw: Mapping[str, Any], position: int) -> DetectionEvent:
        """Translate one raw record at 1-based *position*.

        Raises:
            ValueError: If the record is not a mapping or its size is unknown.
        """
        if not isinstance(raw, Mapping):
            raise ValueError(f"record {position} is not an object")

        size = _CATEGORY_BY_VALUE.get(str(raw.get("size") or ""))
        if size is None:
            raise ValueError(f"record {position} has unknown size {raw.get('size')!r}")

        return DetectionEvent(
            id=str(raw.get("id") or event_id(position)),
            time_offset=hms_to_seconds(raw.get("time") or "00:00:00"),
            absolute_timestamp=_read_timestamp(raw),
            size=size,
            confidence=_read_confidence(raw.get("confidence"), self._default_confidence),
            source=str(raw.get("source") or self._default_source),
        )

    def validate(self, records: Iterable[Any]) -> list[DetectionEvent]:
        """Normalise *records*, silently dropping any that fail."""
        events: list[DetectionEvent] = []
        for position, raw in enumerate(records, start=1):
            try:
                event = self.normalize(raw, position)
            except ValueError as exc:
                self.stats.rejected_count += 1
                logger.debug("Dropped feed record: %s", exc)
                continue
            self.stats.accepted_count += 1
            events.append(event)
        return events
