"""FeedLoader: asynchronous acquisition of the detection event feed.

The feed is a JSON document shaped as ``{"events": [...]}`` (a bare
top-level list is accepted too).  Any failure on the way (transport
error, non-success status, undecodable body, a payload that is not a
list, or a list with no valid records) yields ``Unavailable``.
``load()`` never raises; the SessionStore decides what to substitute.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from cutline_analytics.config import settings
from cutline_analytics.domain.enums import SessionOrigin
from cutline_analytics.domain.session import AcquisitionResult, Acquired, Session, Unavailable
from cutline_analytics.ingest.validator import EventValidator

logger = logging.getLogger(__name__)


class FeedError(Exception):
    """Raised internally when the feed cannot be turned into records."""


def extract_records(document: Any) -> list[Any]:
    """Pull the record list out of a decoded feed document.

    Raises:
        FeedError: If the document carries no list of records.
    """
    if isinstance(document, list):
        return document
    if isinstance(document, dict) and isinstance(document.get("events"), list):
        return document["events"]
    raise FeedError(f"feed payload is not an event list ({type(document).__name__})")


class FeedLoader:
    """Fetches and validates the event feed.

    Args:
        validator: Normaliser for raw records.
        client: Optional pre-built ``httpx.AsyncClient`` (tests inject one
            backed by ``httpx.MockTransport``).
        timeout: Request timeout in seconds.
        duration_minutes: Session duration stamped on acquired sessions.
    """

    def __init__(
        self,
        validator: EventValidator | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
        duration_minutes: int | None = None,
    ) -> None:
        self._validator = validator or EventValidator()
        self._client = client
        self._timeout = settings.feed_timeout_seconds if timeout is None else timeout
        self._duration_minutes = duration_minutes or settings.session_minutes

    @property
    def validator(self) -> EventValidator:
        return self._validator

    async def load(self, url: str, name: str) -> AcquisitionResult:
        """Acquire the feed at *url* as a Session named *name*."""
        try:
            document = await self._fetch_document(url)
            records = extract_records(document)
        except FeedError as exc:
            logger.warning("Event feed unavailable (%s): %s", url, exc)
            return Unavailable(reason=str(exc))

        events = self._validator.validate(records)
        if not events:
            logger.warning("Event feed %s had no valid events (%d records)", url, len(records))
            return Unavailable(reason="feed contained no valid events")

        logger.info("Acquired %d events from %s", len(events), url)
        return Acquired(session=Session(
            name=name,
            origin=SessionOrigin.FEED,
            events=tuple(events),
            duration_minutes=self._duration_minutes,
        ))

    # ── Internals ────────────────────────────────────────────────────────

    async def _fetch_document(self, url: str) -> Any:
        try:
            if self._client is not None:
                response = await self._client.get(url, headers={"Cache-Control": "no-store"})
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.get(url, headers={"Cache-Control": "no-store"})
        except httpx.HTTPError as exc:
            raise FeedError(f"request failed: {exc}") from exc

        if not response.is_success:
            raise FeedError(f"status {response.status_code}")

        try:
            return response.json()
        except ValueError as exc:
            raise FeedError(f"invalid JSON: {exc}") from exc
