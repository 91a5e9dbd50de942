"""cutline-analytics: detection event aggregation for the cutting-line camera.

This is the application entry point.  It wires the FeedLoader,
SessionStore, AnalyticsEngine, and REST endpoints together.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from cutline_analytics.api.analytics import create_analytics_router
from cutline_analytics.config import settings
from cutline_analytics.core.engine import AnalyticsEngine
from cutline_analytics.ingest.feed import FeedLoader
from cutline_analytics.ingest.synthetic import SyntheticEventGenerator
from cutline_analytics.ingest.validator import EventValidator
from cutline_analytics.store.session_store import SessionStore

# ── Logging ──────────────────────────────────────────────────────────────────

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)

# ── Ingestion ────────────────────────────────────────────────────────────────

validator = EventValidator(
    default_source=settings.default_source,
    default_confidence=settings.default_confidence,
)
loader = FeedLoader(validator=validator, timeout=settings.feed_timeout_seconds)
generator = SyntheticEventGenerator(
    count=settings.synthetic_event_count,
    duration_minutes=settings.session_minutes,
)

# ── State ────────────────────────────────────────────────────────────────────

store = SessionStore(loader=loader, generator=generator)
engine = AnalyticsEngine(peak_window=settings.peak_window_minutes)

# ── App ──────────────────────────────────────────────────────────────────────

app = FastAPI(
    title=settings.app_name,
    description="Per-minute detection analytics, peak windows and CSV export",
    version="0.1.0",
)

# ── Routes ───────────────────────────────────────────────────────────────────

app.include_router(create_analytics_router(store, engine))


# ── Health ───────────────────────────────────────────────────────────────────

@app.get("/health")
async def health() -> dict:
    session = store.current
    return {
        "status": "ok",
        "session_loaded": session is not None,
        "session_origin": session.origin.value if session else None,
        "event_count": session.event_count if session else 0,
        "acquisition_pending": store.pending,
        "records": validator.stats.to_dict(),
    }
