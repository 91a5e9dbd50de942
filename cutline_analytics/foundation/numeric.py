"""Numeric helpers shared by the generator and the aggregator."""

from __future__ import annotations

import math


def clamp(value: float, low: float, high: float) -> float:
    return min(high, max(low, value))


def round_half_up(value: float, digits: int) -> float:
    """Round like a dashboard would (0.5 goes up), not banker's rounding."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor
