"""FilterParams: the caller-supplied view parameters.

Coercion here is lenient: an unrecognised value never
raises, it simply means "no filter" for that dimension.  Strict
rejection of bad input belongs to the HTTP boundary.
"""

from __future__ import annotations

import math
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from cutline_analytics.domain.enums import CONFIDENCE_THRESHOLDS, SizeCategory, TimeRangeKey


def _category_or_none(value: Any) -> SizeCategory | None:
    if isinstance(value, SizeCategory):
        return value
    try:
        return SizeCategory(value)
    except ValueError:
        return None


class FilterParams(BaseModel):
    """Hashable parameter set; together with a Session it keys every derived view."""

    time_range: TimeRangeKey = TimeRangeKey.ALL
    date_from: Optional[str] = None
    date_to: Optional[str] = None
    min_confidence: Optional[float] = Field(
        default=0.7,
        description="Display threshold; None disables the confidence filter",
    )
    size: Optional[SizeCategory] = Field(default=None, description="Display category; None means all")
    chart_size: Optional[SizeCategory] = Field(default=None, description="Chart series category; None means totals")

    model_config = {"frozen": True}

    # ── Validators ───────────────────────────────────────────────────────

    @field_validator("time_range", mode="before")
    @classmethod
    def unknown_range_means_all(cls, v: Any) -> TimeRangeKey:
        try:
            return TimeRangeKey(v)
        except ValueError:
            return TimeRangeKey.ALL

    @field_validator("date_from", "date_to", mode="before")
    @classmethod
    def empty_bound_is_absent(cls, v: Any) -> str | None:
        if v is None:
            return None
        text = str(v)
        return text or None

    @field_validator("min_confidence", mode="before")
    @classmethod
    def unknown_threshold_means_no_filter(cls, v: Any) -> float | None:
        try:
            value = float(v)
        except (TypeError, ValueError):
            return None
        if not math.isfinite(value):
            return None
        for allowed in CONFIDENCE_THRESHOLDS:
            if math.isclose(value, allowed):
                return allowed
        return None

    @field_validator("size", "chart_size", mode="before")
    @classmethod
    def unknown_category_means_all(cls, v: Any) -> SizeCategory | None:
        return _category_or_none(v)

    # ── Derived ──────────────────────────────────────────────────────────

    @property
    def absolute_mode(self) -> bool:
        """Either bound switches the time filter to absolute instants."""
        return self.date_from is not None or self.date_to is not None
