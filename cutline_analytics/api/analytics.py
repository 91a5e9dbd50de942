"""REST endpoints for session acquisition, analytics, and CSV export.

Paths:
    POST /api/session/refresh   acquire a new session (feed or synthetic)
    GET  /api/session           current session summary
    GET  /api/analytics         buckets, totals, throughput, peak, chart series
    GET  /api/events            display-filtered event list
    GET  /api/events.csv        the same list as CSV

Query parameters are strict here: unknown enum values or thresholds are
rejected with 422 before they reach the engine.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from cutline_analytics.config import settings
from cutline_analytics.core.engine import AnalyticsEngine, AnalyticsView
from cutline_analytics.domain.enums import CONFIDENCE_THRESHOLDS, SizeCategory, TimeRangeKey
from cutline_analytics.domain.params import FilterParams
from cutline_analytics.foundation.clock import utc_now
from cutline_analytics.store.session_store import SessionStore

logger = logging.getLogger(__name__)


def _filter_params(
    time_range: TimeRangeKey = Query(TimeRangeKey.ALL, alias="range"),
    date_from: Optional[str] = Query(None, alias="from"),
    date_to: Optional[str] = Query(None, alias="to"),
    min_confidence: float = Query(settings.default_confidence_threshold),
    size: Optional[SizeCategory] = None,
    chart_size: Optional[SizeCategory] = None,
) -> FilterParams:
    if not any(math.isclose(min_confidence, t) for t in CONFIDENCE_THRESHOLDS):
        raise HTTPException(
            status_code=422,
            detail=f"min_confidence must be one of {list(CONFIDENCE_THRESHOLDS)}",
        )
    return FilterParams(
        time_range=time_range,
        date_from=date_from,
        date_to=date_to,
        min_confidence=min_confidence,
        size=size,
        chart_size=chart_size,
    )


def create_analytics_router(store: SessionStore, engine: AnalyticsEngine) -> APIRouter:
    """Factory that wires the analytics endpoints to a store + engine."""

    router = APIRouter(prefix="/api", tags=["analytics"])

    def _view(params: FilterParams) -> AnalyticsView | None:
        return engine.analyze(store.current, params)

    @router.post("/session/refresh")
    async def refresh_session(location_id: Optional[int] = None) -> dict[str, Any]:
        url = settings.feed_url_for(location_id)
        logger.info("Refreshing session from %s", url)
        session = await store.acquire(url=url, name=settings.session_name)
        if session is None:
            raise HTTPException(status_code=409, detail="Superseded by a newer refresh")
        return {"session": session.summary()}

    @router.get("/session")
    async def get_session() -> dict[str, Any]:
        session = store.current
        if session is None:
            raise HTTPException(status_code=404, detail="No session loaded")
        return {"session": session.summary()}

    @router.get("/analytics")
    async def get_analytics(params: FilterParams = Depends(_filter_params)) -> dict[str, Any]:
        view = _view(params)
        return {"analytics": view.chart_dict() if view else None}

    @router.get("/events")
    async def get_events(params: FilterParams = Depends(_filter_params)) -> dict[str, Any]:
        view = _view(params)
        if view is None:
            return {"events": None, "count": 0}
        return {
            "events": [
                {**e.model_dump(mode="json"), "time": e.time}
                for e in view.events
            ],
            "count": len(view.events),
        }

    @router.get("/events.csv")
    async def export_events(params: FilterParams = Depends(_filter_params)) -> Response:
        view = _view(params)
        if view is None or not view.events:
            raise HTTPException(status_code=404, detail="No events to export")
        filename = f"pizza-detections-{utc_now().date().isoformat()}.csv"
        return Response(
            content=view.to_csv(),
            media_type="text/csv; charset=utf-8",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    return router
