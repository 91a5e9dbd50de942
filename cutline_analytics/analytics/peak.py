"""SlidingWindowPeakFinder: busiest contiguous run of minute buckets."""

from __future__ import annotations

from typing import Sequence

from cutline_analytics.domain.aggregates import PeakWindow

PEAK_WINDOW = 10


def find_peak_window(totals: Sequence[int], window: int = PEAK_WINDOW) -> PeakWindow:
    """Return the window with the highest summed total.

    Ties keep the lowest start index.  With fewer buckets than the window
    width the result is the zero window at index 0.
    """
    if window <= 0:
        raise ValueError("window must be positive")
    if len(totals) < window:
        return PeakWindow(start_index=0, end_index=window - 1, count=0)

    current = sum(totals[:window])
    best, best_start = current, 0
    for start in range(1, len(totals) - window + 1):
        current += totals[start + window - 1] - totals[start - 1]
        if current > best:
            best, best_start = current, start
    return PeakWindow(start_index=best_start, end_index=best_start + window - 1, count=best)
