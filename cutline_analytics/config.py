"""Application configuration loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "cutline-analytics"
    debug: bool = False
    log_level: str = "INFO"

    # Feed acquisition
    events_feed_url: str = "http://localhost:3000/demo/pizza-events.json"
    events_feed_branch_url: str = "http://localhost:3000/demo/pizza-events-{location_id}.json"
    feed_timeout_seconds: float = 10.0

    # Session
    session_name: str = "cutting-table.mp4"
    session_minutes: int = 60

    # Record defaults
    default_source: str = "Cutting Table 1"
    default_confidence: float = 0.9

    # Synthetic fallback
    synthetic_event_count: int = 220

    # Analytics
    peak_window_minutes: int = 10
    default_confidence_threshold: float = 0.7

    model_config = {"env_prefix": "CUTLINE_"}

    def feed_url_for(self, location_id: int | None = None) -> str:
        """Return the per-branch feed URL, or the default feed when no branch is given."""
        if location_id is None:
            return self.events_feed_url
        return self.events_feed_branch_url.format(location_id=location_id)


settings = Settings()
