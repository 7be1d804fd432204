"""Generic stepped progressions, closed ranges and their iterators.

The classes here know nothing about a concrete number type. Everything that
depends on the element type (how values are coerced, what the sign of a step
is, how the last element and the unit step are found) is delegated to a
:class:`NumericDomain`. Arithmetic and ordering go through the element type's
own operators, so any immutable type with ``+``, ``-``, ``%``, ``//`` and the
rich comparisons can back a progression.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, Iterator, TypeVar

import numpy as np

from .errors import ExhaustedIteratorError, InvalidStepError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def difference_modulo(a: T, b: T, c: T) -> T:
    """Return ``(a - b) mod c`` computed as ``((a mod c) - (b mod c)) mod c``."""
    return ((a % c) - (b % c)) % c


class NumericDomain(ABC, Generic[T]):
    """Capabilities a progression needs from its element type.

    Subclasses must provide ``coerce``, ``unit_step`` and ``end_exclusive``.
    """

    name: ClassVar[str] = "number"

    @abstractmethod
    def coerce(self, value: Any) -> T:
        """Convert *value* to the element type or raise ``TypeError``."""

    def is_zero(self, value: T) -> bool:
        return value == 0

    def is_increasing(self, step: T) -> bool:
        return step > 0

    def last_element(self, start: T, end: T, step: T) -> T:
        """Return the last value reachable from *start* without passing *end*.

        ``last - start`` is always a whole number of steps. When the step
        points away from *end* the progression is empty and *end* is returned
        unchanged.
        """
        if self.is_zero(step):
            raise InvalidStepError("Step is zero.")
        if self.is_increasing(step):
            if start >= end:
                return end
            return end - difference_modulo(end, start, step)
        if start <= end:
            return end
        return end + difference_modulo(start, end, -step)

    @abstractmethod
    def unit_step(self, start: T, end: T) -> T:
        """Return the step a closed range from *start* to *end* walks with."""

    @abstractmethod
    def end_exclusive(self, start: T, last: T) -> T:
        """Return the value one unit past *last*."""


class ProgressionIterator(Iterator[T]):
    """Pull-based cursor over ``first, first + step, ..., last``.

    The iterator starts in the *has next* state when ``first`` lies on the
    correct side of ``last`` for the step direction, and otherwise starts
    exhausted. Returning ``last`` moves it to the exhausted state; any further
    ``next`` raises :class:`ExhaustedIteratorError`.
    """

    __slots__ = ("_step", "_final", "_next", "_has_next")

    def __init__(self, first: T, last: T, step: T, domain: NumericDomain[T]) -> None:
        self._step = step
        self._final = last
        if domain.is_increasing(step):
            self._has_next = first <= last
        else:
            self._has_next = first >= last
        self._next = first if self._has_next else last

    def has_next(self) -> bool:
        return self._has_next

    def __iter__(self) -> "ProgressionIterator[T]":
        return self

    def __next__(self) -> T:
        value = self._next
        if value == self._final:
            if not self._has_next:
                raise ExhaustedIteratorError("progression iterator is exhausted")
            self._has_next = False
        else:
            self._next = self._next + self._step
        return value


class Progression(Generic[T]):
    """Arithmetic progression from ``first`` to ``last`` with a non-zero ``step``.

    ``last`` is computed, not copied: it is the final value reachable from
    ``first`` in whole steps without overshooting the requested end.
    """

    domain: ClassVar[NumericDomain[Any]]

    __slots__ = ("_first", "_last", "_step")

    def __init__(self, start: Any, end_inclusive: Any, step: Any) -> None:
        start = self.domain.coerce(start)
        end_inclusive = self.domain.coerce(end_inclusive)
        step = self.domain.coerce(step)
        if self.domain.is_zero(step):
            raise InvalidStepError("Step must be non-zero.")
        self._first = start
        self._last = self.domain.last_element(start, end_inclusive, step)
        self._step = step
        logger.debug(
            "%s progression %s..%s step %s resolved last element %s",
            self.domain.name,
            start,
            end_inclusive,
            step,
            self._last,
        )

    @classmethod
    def from_closed_range(cls, range_start: Any, range_end: Any, step: Any) -> "Progression[T]":
        """Create a progression from *range_start* toward *range_end*.

        A negative *step* walks backwards.
        """
        return cls(range_start, range_end, step)

    @property
    def first(self) -> T:
        return self._first

    @property
    def last(self) -> T:
        return self._last

    @property
    def step(self) -> T:
        return self._step

    def is_increasing(self) -> bool:
        return self.domain.is_increasing(self._step)

    def is_empty(self) -> bool:
        """Check whether the progression has no elements.

        An increasing progression is empty when its first element is greater
        than the last; a decreasing one when its first element is less.
        """
        if self.is_increasing():
            return self._first > self._last
        return self._first < self._last

    def __iter__(self) -> ProgressionIterator[T]:
        return ProgressionIterator(self._first, self._last, self._step, self.domain)

    def __len__(self) -> int:
        if self.is_empty():
            return 0
        return int((self._last - self._first) // self._step) + 1

    def __bool__(self) -> bool:
        return not self.is_empty()

    def to_array(self) -> "np.ndarray":
        """Return the terms as a one-dimensional object array."""
        terms = list(self)
        array = np.empty(len(terms), dtype=object)
        array[:] = terms
        return array

    def __eq__(self, other: Any) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        if self.is_empty() and other.is_empty():
            return True
        return (
            self._first == other._first
            and self._last == other._last
            and self._step == other._step
        )

    def __hash__(self) -> int:
        if self.is_empty():
            return hash(())
        return hash((self._first, self._last, self._step))

    def __str__(self) -> str:
        if self.is_increasing():
            return f"{self._first}..{self._last} step {self._step}"
        return f"{self._first} downTo {self._last} step {-self._step}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._first!r}, {self._last!r}, {self._step!r})"


class Range(Progression[T]):
    """Closed range ``start..end_inclusive`` walked with the domain's unit step."""

    __slots__ = ()

    def __init__(self, start: Any, end_inclusive: Any) -> None:
        start = self.domain.coerce(start)
        end_inclusive = self.domain.coerce(end_inclusive)
        super().__init__(start, end_inclusive, self.domain.unit_step(start, end_inclusive))

    @property
    def start(self) -> T:
        return self._first

    @property
    def end_inclusive(self) -> T:
        return self._last

    @property
    def end_exclusive(self) -> T:
        return self.domain.end_exclusive(self._first, self._last)

    def __contains__(self, value: Any) -> bool:
        return self._first <= value <= self._last

    def is_empty(self) -> bool:
        """The range is empty when its start is greater than its end."""
        return self._first > self._last

    def __eq__(self, other: Any) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        if self.is_empty() and other.is_empty():
            return True
        return self._first == other._first and self._last == other._last

    def __hash__(self) -> int:
        if self.is_empty():
            return hash(())
        return hash((self._first, self._last))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._first!r}, {self._last!r})"


__all__ = [
    "NumericDomain",
    "Progression",
    "ProgressionIterator",
    "Range",
    "difference_modulo",
]
