"""TimeRangeFilter: narrows a session's events to a time window.

Two mutually exclusive modes:
    - absolute: either bound supplied.  Only events whose own absolute
      timestamp parses are kept, bounds inclusive, a missing or
      unparseable bound is open.  Offsets are never consulted.
    - relative: a trailing window of N minutes ending at the largest
      offset present in the working set.  ``all`` is the identity.

The relative window is anchored on the events' own maximum offset, not
on the nominal session length, so a sparse session can yield a window
narrower than requested.
"""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from cutline_analytics.domain.enums import TimeRangeKey
from cutline_analytics.domain.event import DetectionEvent
from cutline_analytics.domain.params import FilterParams
from cutline_analytics.foundation.clock import parse_instant


def filter_absolute(
    events: Sequence[DetectionEvent],
    date_from: str | None,
    date_to: str | None,
) -> list[DetectionEvent]:
    lower: datetime | None = parse_instant(date_from)
    upper: datetime | None = parse_instant(date_to)

    kept: list[DetectionEvent] = []
    for event in events:
        instant = parse_instant(event.absolute_timestamp)
        if instant is None:
            continue
        if lower is not None and instant < lower:
            continue
        if upper is not None and instant > upper:
            continue
        kept.append(event)
    return kept


def filter_relative(events: Sequence[DetectionEvent], time_range: TimeRangeKey) -> list[DetectionEvent]:
    minutes = time_range.minutes
    if minutes is None:
        return list(events)

    max_offset = max((e.time_offset for e in events), default=0)
    min_offset = max(0, max_offset - minutes * 60)
    return [e for e in events if min_offset <= e.time_offset <= max_offset]


def filter_time_range(events: Sequence[DetectionEvent], params: FilterParams) -> list[DetectionEvent]:
    """Apply whichever time mode *params* selects."""
    if params.absolute_mode:
        return filter_absolute(events, params.date_from, params.date_to)
    return filter_relative(events, params.time_range)
