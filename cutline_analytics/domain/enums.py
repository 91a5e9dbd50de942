"""Controlled enumerations for the cutline-analytics domain.

Every categorical field in the domain MUST reference an enum defined here.
"""

from __future__ import annotations

from enum import Enum


class SizeCategory(str, Enum):
    """The closed set of item size classes the cutting-line camera reports.

    Declaration order is significant: the synthetic generator walks the
    categories in this order when sampling.
    """

    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"
    XL = "XL"


class TimeRangeKey(str, Enum):
    """Trailing time windows selectable for the relative time filter."""

    ALL = "all"
    LAST_5M = "5m"
    LAST_10M = "10m"
    LAST_30M = "30m"
    LAST_60M = "60m"

    @property
    def minutes(self) -> int | None:
        """Window width in minutes, or None for the identity window."""
        if self is TimeRangeKey.ALL:
            return None
        return int(self.value[:-1])


class SessionOrigin(str, Enum):
    """Where a session's events came from."""

    FEED = "feed"
    SYNTHETIC = "synthetic"


# Thresholds offered for the display confidence filter.
CONFIDENCE_THRESHOLDS: tuple[float, ...] = (0.5, 0.6, 0.7, 0.8, 0.9)
