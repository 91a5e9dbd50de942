"""DisplayFilter: the event list shown in the table and exported as CSV.

Both consumers read this one list, so the table and the export can never
disagree.  Filtering preserves input order and is idempotent.
"""

from __future__ import annotations

from typing import Sequence

from cutline_analytics.domain.enums import SizeCategory
from cutline_analytics.domain.event import DetectionEvent


def filter_display(
    events: Sequence[DetectionEvent],
    min_confidence: float | None = 0.7,
    size: SizeCategory | None = None,
) -> list[DetectionEvent]:
    return [
        e for e in events
        if (min_confidence is None or e.confidence >= min_confidence)
        and (size is None or e.size == size)
    ]
