"""Clock and time-format utilities.

All instants in cutline-analytics are UTC-aware.  This module is the
single source of "now" so tests can monkey-patch it trivially.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any

from pydantic import TypeAdapter, ValidationError

_DATETIME = TypeAdapter(datetime)


def utc_now() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(timezone.utc)


def hms_to_seconds(value: Any) -> int:
    """Convert an ``HH:MM:SS`` clock offset to whole seconds (>= 0).

    Anything that is not three numeric parts maps to zero.
    """
    parts = str(value if value is not None else "").split(":")
    if len(parts) != 3:
        return 0
    try:
        h, m, s = (float(p) for p in parts)
    except ValueError:
        return 0
    total = h * 3600 + m * 60 + s
    if not math.isfinite(total):
        return 0
    return max(0, math.floor(total))


def seconds_to_hms(seconds: float) -> str:
    """Render elapsed seconds as zero-padded ``HH:MM:SS``."""
    s = max(0, math.floor(seconds))
    return f"{s // 3600:02d}:{(s % 3600) // 60:02d}:{s % 60:02d}"


def minute_label(index: int) -> str:
    return f"00:{index:02d}"


def parse_instant(value: Any) -> datetime | None:
    """Parse an absolute instant, returning None when it cannot be parsed.

    Naive values are treated as UTC.
    """
    if value is None or value == "":
        return None
    try:
        parsed = _DATETIME.validate_python(value)
    except ValidationError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
