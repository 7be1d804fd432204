"""Exact rational numbers and stepped ranges over integers and rationals."""

from .errors import (
    AlignmentError,
    ExhaustedIteratorError,
    InvalidDenominatorError,
    InvalidStepError,
    MalformedLiteralError,
    RationalsError,
)
from .integer_range import IntegerProgression, IntegerRange
from .progression import Progression, ProgressionIterator, Range
from .rational import (
    Rational,
    align_denominators,
    as_rational_array,
    div_by,
    rationalize,
    to_rational,
    zeros,
    zeros_like,
)
from .rational_range import RationalProgression, RationalRange

__all__ = [
    "AlignmentError",
    "ExhaustedIteratorError",
    "IntegerProgression",
    "IntegerRange",
    "InvalidDenominatorError",
    "InvalidStepError",
    "MalformedLiteralError",
    "Progression",
    "ProgressionIterator",
    "Range",
    "Rational",
    "RationalProgression",
    "RationalRange",
    "RationalsError",
    "align_denominators",
    "as_rational_array",
    "div_by",
    "rationalize",
    "to_rational",
    "zeros",
    "zeros_like",
]
