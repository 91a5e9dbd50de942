"""SyntheticEventGenerator: deterministic stand-in for a missing feed.

Given the same seed string it always produces the same events, so demos
and tests are reproducible.  It is a fallback producer only: it never
repairs or completes records from a real feed.

Algorithm:
    seed      = seed_from_string(f"{name}:events")
    offset_i  = floor(i / count * duration_seconds)
    size_i    = first category whose cumulative weight >= draw()
    conf_i    = round_half_up(clamp(0.72 + draw() * 0.27, 0, 1), 3)
"""

from __future__ import annotations

import logging

from cutline_analytics.config import settings
from cutline_analytics.domain.enums import SessionOrigin, SizeCategory
from cutline_analytics.domain.event import DetectionEvent
from cutline_analytics.domain.session import Session
from cutline_analytics.foundation.identifiers import event_id
from cutline_analytics.foundation.numeric import clamp, round_half_up
from cutline_analytics.foundation.prng import Mulberry32, seed_from_string

logger = logging.getLogger(__name__)

CATEGORY_WEIGHTS: dict[SizeCategory, float] = {
    SizeCategory.SMALL: 0.22,
    SizeCategory.MEDIUM: 0.38,
    SizeCategory.LARGE: 0.31,
    SizeCategory.XL: 0.09,
}

CONFIDENCE_FLOOR = 0.72
CONFIDENCE_SPAN = 0.27


def pick_category(draw: float, weights: dict[SizeCategory, float] = CATEGORY_WEIGHTS) -> SizeCategory:
    """Weighted categorical pick for a uniform *draw* in [0, 1)."""
    acc = 0.0
    for category, weight in weights.items():
        acc += weight
        if draw <= acc:
            return category
    # Cumulative float sum can land just under 1.0
    return list(weights)[-1]


class SyntheticEventGenerator:
    """Produces a fixed-size, evenly spaced, seeded event set."""

    def __init__(
        self,
        count: int | None = None,
        duration_minutes: int | None = None,
        source: str | None = None,
    ) -> None:
        self._count = settings.synthetic_event_count if count is None else count
        self._duration_minutes = duration_minutes or settings.session_minutes
        self._source = source or settings.default_source

    @staticmethod
    def seed_string(name: str) -> str:
        return f"{name or 'demo'}:events"

    def generate(self, seed: str) -> list[DetectionEvent]:
        """Generate the event list for an explicit seed string."""
        rng = Mulberry32(seed_from_string(seed))
        duration_seconds = self._duration_minutes * 60
        events: list[DetectionEvent] = []

        for i in range(self._count):
            offset = i * duration_seconds // self._count
            size = pick_category(rng())
            confidence = clamp(CONFIDENCE_FLOOR + rng() * CONFIDENCE_SPAN, 0.0, 1.0)
            events.append(DetectionEvent(
                id=event_id(i + 1),
                time_offset=offset,
                size=size,
                confidence=round_half_up(confidence, 3),
                source=self._source,
            ))
        return events

    def generate_session(self, name: str) -> Session:
        """Build a complete synthetic Session for the named session."""
        seed = self.seed_string(name)
        events = self.generate(seed)
        logger.info("Generated %d synthetic events (seed=%r)", len(events), seed)
        return Session(
            name=name,
            origin=SessionOrigin.SYNTHETIC,
            events=tuple(events),
            duration_minutes=self._duration_minutes,
        )
