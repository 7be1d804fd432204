"""Exceptions raised by the rationals package."""
from __future__ import annotations


class RationalsError(Exception):
    """Base class for every error raised by this package."""


class InvalidDenominatorError(RationalsError, ZeroDivisionError):
    """A rational was built or divided with a zero denominator."""


class InvalidStepError(RationalsError, ValueError):
    """A progression was given a zero step."""


class MalformedLiteralError(RationalsError, ValueError):
    """A string does not follow the ``numerator[/denominator]`` grammar."""


class ExhaustedIteratorError(RationalsError, StopIteration):
    """``next`` was called on a progression iterator with no elements left."""


class AlignmentError(RationalsError, ArithmeticError):
    """Two rationals could not be rewritten over a common denominator."""


__all__ = [
    "RationalsError",
    "InvalidDenominatorError",
    "InvalidStepError",
    "MalformedLiteralError",
    "ExhaustedIteratorError",
    "AlignmentError",
]
