"""Exact rational numbers with NumPy interoperability."""
from __future__ import annotations

import math
import numbers
import operator
import re
from fractions import Fraction
from typing import TYPE_CHECKING, Any, Tuple, Union

import numpy as np

from .errors import AlignmentError, InvalidDenominatorError, MalformedLiteralError

if TYPE_CHECKING:  # pragma: no cover - imported for annotations only
    from .rational_range import RationalRange

NumberLike = Union["Rational", Fraction, numbers.Integral]
Pair = Tuple[int, int]

_INTEGER_LITERAL = re.compile(r"[+-]?[0-9]+")


def _ensure_int(value: Any, *, name: str) -> int:
    """Convert *value* to ``int`` when it represents an integer."""
    if isinstance(value, numbers.Integral):
        return int(value)
    raise TypeError(f"{name} must be an integer, got {type(value)!r}")


def _strip_powers_of_ten(num: int, den: int) -> Pair:
    """Divide out the largest power of ten shared by *num* and *den*."""
    factor = 10
    while num % factor == 0 and den % factor == 0:
        factor *= 10
    factor //= 10
    if factor == 1:
        return num, den
    return num // factor, den // factor


def canonicalize(num: int, den: int) -> Pair:
    """Return the reduced, positive-denominator form of ``num/den``.

    Shared powers of ten are removed before the gcd reduction so that
    decimal-scaled inputs such as ``2000000000/4000000000`` reach the gcd
    step with small operands. The result is the same as plain gcd reduction.
    """
    if den == 0:
        raise InvalidDenominatorError("The denominator can't be zero")
    num, den = _strip_powers_of_ten(num, den)
    if num == den:
        return 1, 1
    gcd = math.gcd(num, den)
    num //= gcd
    den //= gcd
    if den < 0:
        num, den = -num, -den
    return num, den


def _parse_integer(text: str, *, name: str, source: str) -> int:
    if not _INTEGER_LITERAL.fullmatch(text):
        raise MalformedLiteralError(f"invalid {name} {text!r} in literal {source!r}")
    return int(text)


class Rational:
    """Immutable rational number stored in canonical form.

    The numerator carries the sign, the denominator is always positive and
    the pair is fully reduced, so two values are equal exactly when their
    components are equal.
    """

    __slots__ = ("_numerator", "_denominator")
    __array_priority__ = 1000.0  # Prefer Rational semantics in NumPy expressions.

    def __init__(
        self,
        numerator: Union[int, numbers.Integral] = 0,
        denominator: Union[int, numbers.Integral] = 1,
    ) -> None:
        num = _ensure_int(numerator, name="numerator")
        den = _ensure_int(denominator, name="denominator")
        self._numerator, self._denominator = canonicalize(num, den)

    # ------------------------------------------------------------------
    # Constructors
    @classmethod
    def parse(cls, text: str) -> "Rational":
        """Parse ``"<int>"`` or ``"<int>/<int>"`` into a :class:`Rational`."""
        if not isinstance(text, str):
            raise TypeError(f"expected a string, got {type(text)!r}")
        literal = text.strip()
        slashes = literal.count("/")
        if slashes == 0:
            return cls(_parse_integer(literal, name="integer", source=text))
        if slashes > 1:
            raise MalformedLiteralError(
                f"expected a single '/' between numerator and denominator in {text!r}"
            )
        num_text, den_text = literal.split("/")
        return cls(
            _parse_integer(num_text, name="numerator", source=text),
            _parse_integer(den_text, name="denominator", source=text),
        )

    @classmethod
    def from_fraction(cls, value: Fraction) -> "Rational":
        """Create a :class:`Rational` from :class:`fractions.Fraction`."""
        return cls(value.numerator, value.denominator)

    @classmethod
    def rationalize(cls, value: NumberLike) -> "Rational":
        """Coerce an exact numeric value into :class:`Rational`.

        Floats are rejected: they cannot be represented without choosing an
        approximation.
        """
        if isinstance(value, Rational):
            return value
        if isinstance(value, Fraction):
            return cls.from_fraction(value)
        if isinstance(value, np.generic):
            return cls.rationalize(value.item())
        if isinstance(value, numbers.Integral):
            return cls(int(value), 1)
        raise TypeError(f"Cannot convert {type(value)!r} to Rational")

    # ------------------------------------------------------------------
    # Properties and helpers
    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    def as_fraction(self) -> Fraction:
        """Return a :class:`Fraction` with the same value."""
        return Fraction(self._numerator, self._denominator)

    def range_to(self, other: NumberLike) -> "RationalRange":
        """Return the closed range ``self..other``."""
        from .rational_range import RationalRange

        return RationalRange(self, other)

    # ------------------------------------------------------------------
    # Arithmetic
    def add(self, other: NumberLike) -> "Rational":
        left, right = align_denominators(self, self._coerce_scalar(other))
        return Rational(left[0] + right[0], left[1])

    def subtract(self, other: NumberLike) -> "Rational":
        left, right = align_denominators(self, self._coerce_scalar(other))
        return Rational(left[0] - right[0], left[1])

    def multiply(self, other: NumberLike) -> "Rational":
        other_rat = self._coerce_scalar(other)
        return Rational(
            self._numerator * other_rat._numerator,
            self._denominator * other_rat._denominator,
        )

    def divide(self, other: NumberLike) -> "Rational":
        other_rat = self._coerce_scalar(other)
        if other_rat._numerator == 0:
            raise InvalidDenominatorError("division by zero")
        return Rational(
            self._numerator * other_rat._denominator,
            self._denominator * other_rat._numerator,
        )

    def negate(self) -> "Rational":
        return Rational(-self._numerator, self._denominator)

    def compare_to(self, other: NumberLike) -> int:
        """Return -1, 0 or 1 as ``self`` is less than, equal to or greater than *other*."""
        difference = self.subtract(other)
        if difference._numerator == 0:
            return 0
        return -1 if difference._numerator < 0 else 1

    # ------------------------------------------------------------------
    # Numeric protocol
    def __float__(self) -> float:  # pragma: no cover - trivial mapping
        return self._numerator / self._denominator

    def __int__(self) -> int:
        if self._numerator < 0:
            return -(-self._numerator // self._denominator)
        return self._numerator // self._denominator

    def __bool__(self) -> bool:  # pragma: no cover - trivial mapping
        return self._numerator != 0

    # ------------------------------------------------------------------
    # Representation
    def __repr__(self) -> str:
        return f"Rational({self._numerator}, {self._denominator})"

    def __str__(self) -> str:
        if self._denominator == 1:
            return str(self._numerator)
        if self._numerator == self._denominator:
            return "1"
        return f"{self._numerator}/{self._denominator}"

    def __format__(self, format_spec: str) -> str:
        if format_spec in ("", "r", "R"):
            return str(self)
        try:
            return format(float(self), format_spec)
        except (ValueError, TypeError):
            return format(str(self), format_spec)

    # ------------------------------------------------------------------
    # Internal helpers
    def _coerce_scalar(self, value: Any) -> "Rational":
        if isinstance(value, Rational):
            return value
        if isinstance(value, Fraction):
            return Rational.from_fraction(value)
        if isinstance(value, np.generic):  # NumPy scalars
            return self._coerce_scalar(value.item())
        if isinstance(value, numbers.Integral):
            return Rational(int(value), 1)
        raise TypeError(f"Cannot interpret {type(value)!r} as Rational")

    def _binary_operation(self, other: Any, op):
        if isinstance(other, np.ndarray):
            vectorised = np.vectorize(
                lambda x: op(self, self._coerce_scalar(x)),
                otypes=[object],
            )
            return vectorised(other)
        return op(self, self._coerce_scalar(other))

    def _reflected_operation(self, other: Any, op):
        if isinstance(other, np.ndarray):
            vectorised = np.vectorize(
                lambda x: op(self._coerce_scalar(x), self),
                otypes=[object],
            )
            return vectorised(other)
        return op(self._coerce_scalar(other), self)

    @staticmethod
    def _floordiv(a: "Rational", b: "Rational") -> int:
        if b._numerator == 0:
            raise InvalidDenominatorError("integer division by zero")
        return (a._numerator * b._denominator) // (a._denominator * b._numerator)

    @staticmethod
    def _mod(a: "Rational", b: "Rational") -> "Rational":
        return a.subtract(b.multiply(Rational._floordiv(a, b)))

    def _coerce_power(self, value: Any) -> int:
        if isinstance(value, Rational):
            if value.denominator != 1:
                raise ValueError("Exponent must be an integer")
            return value.numerator
        if isinstance(value, np.generic):
            return self._coerce_power(value.item())
        if isinstance(value, numbers.Integral):
            return int(value)
        raise TypeError("Unsupported exponent type")

    # ------------------------------------------------------------------
    # Arithmetic operators
    def __add__(self, other: Any) -> Any:
        return self._binary_operation(other, Rational.add)

    def __radd__(self, other: Any) -> Any:
        return self.__add__(other)

    def __sub__(self, other: Any) -> Any:
        return self._binary_operation(other, Rational.subtract)

    def __rsub__(self, other: Any) -> Any:
        return self._reflected_operation(other, Rational.subtract)

    def __mul__(self, other: Any) -> Any:
        return self._binary_operation(other, Rational.multiply)

    def __rmul__(self, other: Any) -> Any:
        return self.__mul__(other)

    def __truediv__(self, other: Any) -> Any:
        return self._binary_operation(other, Rational.divide)

    def __rtruediv__(self, other: Any) -> Any:
        return self._reflected_operation(other, Rational.divide)

    def __floordiv__(self, other: Any) -> Any:
        return self._binary_operation(other, Rational._floordiv)

    def __rfloordiv__(self, other: Any) -> Any:
        return self._reflected_operation(other, Rational._floordiv)

    def __mod__(self, other: Any) -> Any:
        return self._binary_operation(other, Rational._mod)

    def __rmod__(self, other: Any) -> Any:
        return self._reflected_operation(other, Rational._mod)

    def __divmod__(self, other: Any) -> Tuple[int, "Rational"]:
        other_rat = self._coerce_scalar(other)
        return Rational._floordiv(self, other_rat), Rational._mod(self, other_rat)

    def __pow__(self, exponent: Any) -> Any:
        if isinstance(exponent, np.ndarray):
            vectorised = np.vectorize(lambda x: self.__pow__(x), otypes=[object])
            return vectorised(exponent)
        power = self._coerce_power(exponent)
        if power >= 0:
            return Rational(self._numerator ** power, self._denominator ** power)
        if self._numerator == 0:
            raise InvalidDenominatorError("0 cannot be raised to a negative power")
        positive = -power
        return Rational(self._denominator ** positive, self._numerator ** positive)

    def __neg__(self) -> "Rational":
        return self.negate()

    def __pos__(self) -> "Rational":  # pragma: no cover - trivial
        return self

    def __abs__(self) -> "Rational":
        return Rational(abs(self._numerator), self._denominator)

    # ------------------------------------------------------------------
    # Comparisons
    def _compare(self, other: Any, op) -> bool:
        return op(self.compare_to(other), 0)

    def __eq__(self, other: Any) -> bool:
        try:
            other_rat = self._coerce_scalar(other)
        except TypeError:
            return False
        return (
            self._numerator == other_rat._numerator
            and self._denominator == other_rat._denominator
        )

    def __lt__(self, other: Any) -> bool:
        return self._compare(other, operator.lt)

    def __le__(self, other: Any) -> bool:
        return self._compare(other, operator.le)

    def __gt__(self, other: Any) -> bool:
        return self._compare(other, operator.gt)

    def __ge__(self, other: Any) -> bool:
        return self._compare(other, operator.ge)

    def __hash__(self) -> int:
        # Equal to ``int`` and ``Fraction`` values, so it must hash like them.
        return hash(Fraction(self._numerator, self._denominator))

    # ------------------------------------------------------------------
    # NumPy interoperability
    _UFUNC_DISPATCH = {
        np.add: operator.add,
        np.subtract: operator.sub,
        np.multiply: operator.mul,
        np.divide: operator.truediv,
        np.true_divide: operator.truediv,
        np.floor_divide: operator.floordiv,
        np.remainder: operator.mod,
        np.negative: operator.neg,
        np.positive: operator.pos,
        np.absolute: abs,
        np.power: operator.pow,
    }

    def __array_ufunc__(self, ufunc, method, *inputs, **kwargs):
        if method != "__call__":
            return NotImplemented
        if kwargs.get("out") is not None:
            raise NotImplementedError("`out` argument is not supported for Rational ufuncs")
        op = self._UFUNC_DISPATCH.get(ufunc)
        if op is None:
            return NotImplemented

        coerced = []
        has_array = False
        for value in inputs:
            if isinstance(value, np.ndarray):
                coerced.append(as_rational_array(value))
                has_array = True
            else:
                coerced.append(self._coerce_scalar(value))
        if has_array:
            vectorised = np.vectorize(op, otypes=[object])
            return vectorised(*coerced)
        return op(*coerced)


def align_denominators(first: Rational, second: Rational) -> Tuple[Pair, Pair]:
    """Rewrite two rationals as ``(numerator, denominator)`` pairs over one denominator.

    Matching denominators are left untouched; otherwise each pair is scaled by
    the other operand's denominator.
    """
    if first.denominator == second.denominator:
        first_factor = second_factor = 1
    else:
        first_factor, second_factor = second.denominator, first.denominator
    left = (first.numerator * first_factor, first.denominator * first_factor)
    right = (second.numerator * second_factor, second.denominator * second_factor)
    if left[1] != right[1]:
        raise AlignmentError(
            f"denominators differ after applying the alignment factors: {left}, {right}"
        )
    return left, right


def rationalize(value: NumberLike) -> Rational:
    """Public helper to convert *value* into :class:`Rational`."""

    return Rational.rationalize(value)


def to_rational(text: str) -> Rational:
    """Parse a ``"<num>/<den>"`` or ``"<int>"`` literal."""

    return Rational.parse(text)


def div_by(numerator: Union[int, numbers.Integral], denominator: Union[int, numbers.Integral]) -> Rational:
    """Return ``numerator / denominator`` as a :class:`Rational`."""

    return Rational(numerator, denominator)


def as_rational_array(values: Any, *, copy: bool = True) -> "np.ndarray":
    """Return a ``numpy.ndarray`` of :class:`Rational` values.

    ``values`` can be any iterable of exact numeric entries or an existing
    NumPy array. When ``copy`` is ``False`` and ``values`` is already an
    object array holding only :class:`Rational` items, it is returned as is.
    """

    if isinstance(values, np.ndarray):
        array = values.copy() if copy else values
        if array.dtype != object:
            array = array.astype(object, copy=False)
        if all(isinstance(item, Rational) for item in array.flat):
            return array
        vectorised = np.vectorize(Rational.rationalize, otypes=[object])
        return vectorised(array)

    if isinstance(values, (list, tuple)):
        coerced = [Rational.rationalize(item) for item in values]
        array = np.empty(len(coerced), dtype=object)
        array[:] = coerced
        return array

    return as_rational_array(list(values), copy=copy)


def zeros(length: int) -> "np.ndarray":
    """Return a one-dimensional array of length ``length`` filled with zeros."""

    if length < 0:
        raise ValueError("length must be non-negative")
    return as_rational_array([Rational(0) for _ in range(length)])


def zeros_like(values: Any) -> "np.ndarray":
    """Return a zero-filled array that matches the shape of ``values``."""

    array = as_rational_array(values, copy=False)
    zeros_flat = [Rational(0) for _ in range(array.size)]
    return np.array(zeros_flat, dtype=object).reshape(array.shape)


__all__ = [
    "Rational",
    "align_denominators",
    "as_rational_array",
    "canonicalize",
    "div_by",
    "rationalize",
    "to_rational",
    "zeros",
    "zeros_like",
]
