"""Derived analytics structures: minute buckets, totals, the peak window.

These are pure observations computed from a Session plus filter
parameters.  They are never persisted and never cached across sessions.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from cutline_analytics.domain.enums import SizeCategory
from cutline_analytics.foundation.clock import minute_label


def empty_counts() -> dict[SizeCategory, int]:
    return {category: 0 for category in SizeCategory}


class MinuteBucket(BaseModel):
    """Event counts for one minute of the session."""

    index: int = Field(..., ge=0)
    total: int = Field(default=0, ge=0)
    counts_by_category: dict[SizeCategory, int] = Field(default_factory=empty_counts)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def total_matches_categories(self) -> "MinuteBucket":
        if self.total != sum(self.counts_by_category.values()):
            raise ValueError(
                f"bucket {self.index}: total {self.total} != "
                f"sum of category counts {sum(self.counts_by_category.values())}"
            )
        return self

    @property
    def label(self) -> str:
        return minute_label(self.index)

    def count_for(self, category: SizeCategory | None) -> int:
        """Total for the bucket, or one category's count."""
        if category is None:
            return self.total
        return self.counts_by_category.get(category, 0)

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "minute": self.label,
            "total": self.total,
            **{c.value: n for c, n in self.counts_by_category.items()},
        }


class CategoryTotals(BaseModel):
    """Elementwise sum of every bucket in a session."""

    total: int = 0
    counts_by_category: dict[SizeCategory, int] = Field(default_factory=empty_counts)

    model_config = {"frozen": True}

    def to_dict(self) -> dict:
        return {"total": self.total, **{c.value: n for c, n in self.counts_by_category.items()}}


class PeakWindow(BaseModel):
    """The busiest contiguous run of buckets (inclusive bounds)."""

    start_index: int = Field(..., ge=0)
    end_index: int = Field(..., ge=0)
    count: int = Field(..., ge=0)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def bounds_ordered(self) -> "PeakWindow":
        if self.end_index < self.start_index:
            raise ValueError("end_index must not precede start_index")
        return self

    def to_dict(self) -> dict:
        return {
            "count": self.count,
            "start_index": self.start_index,
            "end_index": self.end_index,
            "start": minute_label(self.start_index),
            "end": minute_label(self.end_index),
        }
