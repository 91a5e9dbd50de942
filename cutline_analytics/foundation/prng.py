"""Deterministic pseudo-random source for the synthetic event fallback.

Two pieces:
    - seed_from_string(): 32-bit FNV-1a hash, so a session name always
      maps to the same seed.
    - Mulberry32: a tiny 32-bit generator returning floats in [0, 1).

Both work on unsigned 32-bit arithmetic; every intermediate is masked.
"""

from __future__ import annotations

_MASK = 0xFFFFFFFF
_FNV_OFFSET = 2166136261
_FNV_PRIME = 16777619


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK


def seed_from_string(text: str) -> int:
    """Fold each UTF-16 code unit into a 32-bit accumulator (FNV-1a).

    Characters outside the BMP contribute both surrogate halves.
    """
    h = _FNV_OFFSET
    data = text.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(data), 2):
        h ^= data[i] | (data[i + 1] << 8)
        h = _imul(h, _FNV_PRIME)
    return h


class Mulberry32:
    """Callable generator: each call returns the next float in [0, 1)."""

    __slots__ = ("_state",)

    def __init__(self, seed: int) -> None:
        self._state = seed & _MASK

    def __call__(self) -> float:
        self._state = (self._state + 0x6D2B79F5) & _MASK
        x = self._state
        x = _imul(x ^ (x >> 15), x | 1)
        x ^= (x + _imul(x ^ (x >> 7), x | 61)) & _MASK
        return ((x ^ (x >> 14)) & _MASK) / 4294967296
