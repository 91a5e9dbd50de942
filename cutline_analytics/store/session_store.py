"""SessionStore: owns the current Session and its acquisition.

Design notes:
    - Acquisition is the only suspension point.  While a request is in
      flight there is no current session, so every derived view is absent.
    - Each acquisition takes the next value of a monotonic request
      counter.  A response whose counter is no longer the latest is
      discarded: last requested wins, not first to complete.
    - ``Unavailable`` always substitutes the synthetic generator, so the
      analytics stages never see an error state.
    - Sessions are replaced wholesale, never mutated.
"""

from __future__ import annotations

import logging

from cutline_analytics.config import settings
from cutline_analytics.domain.session import Acquired, Session
from cutline_analytics.ingest.feed import FeedLoader
from cutline_analytics.ingest.synthetic import SyntheticEventGenerator

logger = logging.getLogger(__name__)


class SessionStore:
    """Holds at most one Session; refreshed through ``acquire()``.

    Args:
        loader: Fetches and validates the real feed.
        generator: Synthetic fallback producer.
    """

    def __init__(
        self,
        loader: FeedLoader | None = None,
        generator: SyntheticEventGenerator | None = None,
    ) -> None:
        self._loader = loader or FeedLoader()
        self._generator = generator or SyntheticEventGenerator()
        self._latest_request: int = 0
        self._session: Session | None = None

    # ── Public API ───────────────────────────────────────────────────────

    @property
    def current(self) -> Session | None:
        return self._session

    @property
    def pending(self) -> bool:
        return self._session is None and self._latest_request > 0

    @property
    def latest_request(self) -> int:
        return self._latest_request

    async def acquire(self, url: str | None = None, name: str | None = None) -> Session | None:
        """Load a new session from *url*, falling back to synthetic data.

        Returns the installed Session, or None if a newer request
        superseded this one before it resolved.
        """
        self._latest_request += 1
        request_id = self._latest_request
        self._session = None

        url = url or settings.events_feed_url
        name = name or settings.session_name
        result = await self._loader.load(url, name)

        if request_id != self._latest_request:
            logger.info(
                "Discarding stale acquisition #%d (latest is #%d)",
                request_id,
                self._latest_request,
            )
            return None

        if isinstance(result, Acquired):
            session = result.session
        else:
            logger.info("Falling back to synthetic events: %s", result.reason)
            session = self._generator.generate_session(name)

        self._session = session
        logger.info(
            "Installed session %s (%s, %d events)",
            session.session_id,
            session.origin.value,
            session.event_count,
        )
        return session

    def replace(self, session: Session) -> None:
        """Install a pre-built session, superseding any request in flight."""
        self._latest_request += 1
        self._session = session
