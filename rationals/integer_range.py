"""Progressions and closed ranges over arbitrary-precision integers."""
from __future__ import annotations

import numbers
from typing import Any

from .progression import NumericDomain, Progression, Range


class IntegerDomain(NumericDomain[int]):
    name = "integer"

    def coerce(self, value: Any) -> int:
        if isinstance(value, numbers.Integral):
            return int(value)
        raise TypeError(f"integer progressions need integral values, got {type(value)!r}")

    def unit_step(self, start: int, end: int) -> int:
        return 1

    def end_exclusive(self, start: int, last: int) -> int:
        return last + 1


INTEGERS = IntegerDomain()


class IntegerProgression(Progression[int]):
    """Progression of ``int`` values with an arbitrary non-zero integer step."""

    domain = INTEGERS


class IntegerRange(Range[int], IntegerProgression):
    """Closed integer range ``start..end_inclusive`` with step 1."""

    domain = INTEGERS

    def __str__(self) -> str:
        return f"{self._first}..{self._last}"


EMPTY = IntegerRange(1, 0)


__all__ = ["EMPTY", "INTEGERS", "IntegerDomain", "IntegerProgression", "IntegerRange"]
