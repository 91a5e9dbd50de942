"""AnalyticsEngine: every derived view as a pure function of a Session.

Design principles:
    1. ``analyze(session, params)`` has no side effects on its inputs.
    2. The only state is an explicit memo keyed by
       ``(session.session_id, params)``; it is dropped the moment a
       different session is seen, so nothing survives re-ingestion.
    3. No session means no views: ``analyze(None, ...)`` returns None.

Pipeline:
    events ─▶ time range ─┬─▶ minute buckets ─▶ peak window
                          └─▶ display filter ─▶ (table, CSV)
"""

from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from cutline_analytics.analytics.buckets import BUCKET_COUNT, MinuteSeries, aggregate_minutes
from cutline_analytics.analytics.display import filter_display
from cutline_analytics.analytics.peak import PEAK_WINDOW, find_peak_window
from cutline_analytics.analytics.time_range import filter_time_range
from cutline_analytics.domain.aggregates import PeakWindow
from cutline_analytics.domain.event import DetectionEvent
from cutline_analytics.domain.params import FilterParams
from cutline_analytics.domain.session import Session
from cutline_analytics.export.csv_export import export_csv

logger = logging.getLogger(__name__)


class AnalyticsView(BaseModel):
    """Everything the dashboard shows for one (session, params) pair."""

    session_id: UUID
    params: FilterParams
    time_filtered_count: int
    minutes: MinuteSeries
    peak: PeakWindow
    chart_series: list[int]
    events: tuple[DetectionEvent, ...]

    model_config = {"frozen": True}

    def to_csv(self) -> str:
        return export_csv(self.events)

    def chart_dict(self) -> dict:
        return {
            "session_id": str(self.session_id),
            "time_filtered_count": self.time_filtered_count,
            "buckets": [b.to_dict() for b in self.minutes.buckets],
            "totals": self.minutes.totals.to_dict(),
            "throughput": self.minutes.throughput,
            "peak": self.peak.to_dict(),
            "chart_category": self.params.chart_size.value if self.params.chart_size else "All",
            "chart_series": self.chart_series,
        }


class AnalyticsEngine:
    """Computes AnalyticsViews, memoising per (session, params)."""

    def __init__(
        self,
        bucket_count: int = BUCKET_COUNT,
        peak_window: int = PEAK_WINDOW,
        max_cached_views: int = 32,
    ) -> None:
        self._bucket_count = bucket_count
        self._peak_window = peak_window
        self._max_cached_views = max_cached_views
        self._cache_session: UUID | None = None
        self._cache: dict[FilterParams, AnalyticsView] = {}

    # ── Public API ───────────────────────────────────────────────────────

    def analyze(self, session: Optional[Session], params: FilterParams) -> AnalyticsView | None:
        if session is None:
            return None

        if session.session_id != self._cache_session:
            self._cache.clear()
            self._cache_session = session.session_id

        view = self._cache.get(params)
        if view is None:
            view = self._compute(session, params)
            if len(self._cache) >= self._max_cached_views:
                self._cache.pop(next(iter(self._cache)))
            self._cache[params] = view
        return view

    # ── Internals ────────────────────────────────────────────────────────

    def _compute(self, session: Session, params: FilterParams) -> AnalyticsView:
        in_range = filter_time_range(session.events, params)
        minutes = aggregate_minutes(in_range, self._bucket_count)
        peak = find_peak_window(minutes.bucket_totals, self._peak_window)
        shown = filter_display(in_range, params.min_confidence, params.size)

        logger.debug(
            "Computed view for session %s: %d in range, %d shown, peak %d @ %d",
            session.session_id,
            len(in_range),
            len(shown),
            peak.count,
            peak.start_index,
        )
        return AnalyticsView(
            session_id=session.session_id,
            params=params,
            time_filtered_count=len(in_range),
            minutes=minutes,
            peak=peak,
            chart_series=minutes.series(params.chart_size),
            events=tuple(shown),
        )
