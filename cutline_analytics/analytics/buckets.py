"""TimeBucketAggregator: folds events into a dense per-minute series.

Always returns exactly ``bucket_count`` buckets; empty minutes are zero,
never omitted.  Event order does not matter.  Partial series (for
example from partitioned input) combine with ``merge_series``, which is
associative and gives the same result as a single pass.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from pydantic import BaseModel

from cutline_analytics.domain.aggregates import CategoryTotals, MinuteBucket, empty_counts
from cutline_analytics.domain.enums import SizeCategory
from cutline_analytics.domain.event import DetectionEvent
from cutline_analytics.foundation.numeric import round_half_up

BUCKET_COUNT = 60
BUCKET_SECONDS = 60


class MinuteSeries(BaseModel):
    """The aggregation result: buckets plus session-wide totals."""

    buckets: tuple[MinuteBucket, ...]
    totals: CategoryTotals
    throughput: float

    model_config = {"frozen": True}

    def series(self, category: SizeCategory | None = None) -> list[int]:
        """Per-minute values for charting: totals, or one category's counts."""
        return [b.count_for(category) for b in self.buckets]

    @property
    def bucket_totals(self) -> list[int]:
        return [b.total for b in self.buckets]


def bucket_index(time_offset: int, bucket_count: int = BUCKET_COUNT) -> int:
    return min(max(time_offset // BUCKET_SECONDS, 0), bucket_count - 1)


def _build(counts: list[dict[SizeCategory, int]]) -> MinuteSeries:
    buckets = tuple(
        MinuteBucket(index=i, total=sum(c.values()), counts_by_category=c)
        for i, c in enumerate(counts)
    )
    overall = empty_counts()
    for bucket in buckets:
        for category, n in bucket.counts_by_category.items():
            overall[category] += n
    total = sum(overall.values())
    return MinuteSeries(
        buckets=buckets,
        totals=CategoryTotals(total=total, counts_by_category=overall),
        throughput=round_half_up(total / max(1, len(buckets)), 1),
    )


def aggregate_minutes(
    events: Iterable[DetectionEvent],
    bucket_count: int = BUCKET_COUNT,
) -> MinuteSeries:
    """Single linear pass over *events* into ``bucket_count`` minute buckets."""
    counts = [empty_counts() for _ in range(bucket_count)]
    for event in events:
        counts[bucket_index(event.time_offset, bucket_count)][event.size] += 1
    return _build(counts)


def merge_series(parts: Sequence[MinuteSeries]) -> MinuteSeries:
    """Combine partial aggregations bucket by bucket."""
    if not parts:
        return aggregate_minutes(())
    width = len(parts[0].buckets)
    counts = [empty_counts() for _ in range(width)]
    for part in parts:
        if len(part.buckets) != width:
            raise ValueError("cannot merge series of different lengths")
        for bucket in part.buckets:
            for category, n in bucket.counts_by_category.items():
                counts[bucket.index][category] += n
    return _build(counts)
