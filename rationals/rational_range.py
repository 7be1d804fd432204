"""Progressions and closed ranges over :class:`~rationals.rational.Rational`.

Rationals have no natural successor, so a closed range derives its step from
its endpoints: both endpoints are aligned over a common denominator ``L`` and
the range walks in steps of ``1/L``. The distance between the endpoints is
then a whole number of steps and the inclusive end is the supplied bound.
"""
from __future__ import annotations

import logging
from typing import Any

from .progression import NumericDomain, Progression, Range
from .rational import Rational, align_denominators

logger = logging.getLogger(__name__)


class RationalDomain(NumericDomain[Rational]):
    name = "rational"

    def coerce(self, value: Any) -> Rational:
        return Rational.rationalize(value)

    def is_zero(self, value: Rational) -> bool:
        return value.numerator == 0

    def is_increasing(self, step: Rational) -> bool:
        return step.numerator > 0

    def unit_step(self, start: Rational, end: Rational) -> Rational:
        (_, common), _ = align_denominators(start, end)
        step = Rational(1, common)
        logger.debug("derived step %s for rational range %s..%s", step, start, end)
        return step

    def end_exclusive(self, start: Rational, last: Rational) -> Rational:
        # Approximation: one unit of the start's denominator past the last element.
        return last + Rational(1, start.denominator)


RATIONALS = RationalDomain()


class RationalProgression(Progression[Rational]):
    """Progression of :class:`Rational` values with a caller-supplied step."""

    domain = RATIONALS


class RationalRange(Range[Rational], RationalProgression):
    """Closed rational range ``start..end_inclusive`` with a derived step."""

    domain = RATIONALS


__all__ = ["RATIONALS", "RationalDomain", "RationalProgression", "RationalRange"]
