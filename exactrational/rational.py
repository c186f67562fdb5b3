"""Exact rational numbers over fixed-width integers with NumPy interoperability."""
from __future__ import annotations

import logging
import math
import numbers
import operator
from fractions import Fraction
from typing import Any, Callable, Optional, Tuple, Union

import numpy as np

from . import codec
from .errors import (
    DenormalizedConversionError,
    DivisionByZeroError,
    RationalOverflowError,
    RationalParseError,
    ZeroDenominatorError,
)
from .primitive import DEFAULT_DTYPE, Primitive, gcd, iabs, primitive_for

LOG = logging.getLogger(__name__)

NumberLike = Union["Rational", Fraction, numbers.Integral]
DTypeLike = Any

_COMPARISONS = frozenset(
    {operator.eq, operator.ne, operator.lt, operator.le, operator.gt, operator.ge}
)


def normalize(numerator: int, denominator: int, primitive: Primitive) -> Tuple[int, int]:
    """Reduce ``numerator/denominator`` to canonical form.

    Raises :class:`ZeroDenominatorError` for a zero denominator and
    :class:`RationalOverflowError` when moving the sign to the numerator
    would negate the most negative value of *primitive*.
    """
    if denominator == 0:
        raise ZeroDenominatorError()

    if numerator == 0:
        return 0, 1

    g = iabs(gcd(numerator, denominator))
    numerator //= g
    denominator //= g

    if denominator < 0:
        if denominator < -primitive.max or numerator < -primitive.max:
            raise RationalOverflowError(
                f"bad rational: {numerator}/{denominator} cannot be sign-normalized "
                f"within the {primitive.dtype.name} range"
            )
        numerator = -numerator
        denominator = -denominator

    return numerator, denominator


def is_normalized(numerator: int, denominator: int) -> bool:
    return (
        denominator > 0
        and (numerator != 0 or denominator == 1)
        and iabs(gcd(numerator, denominator)) == 1
    )


def less_than(n1: int, d1: int, n2: int, d2: int) -> bool:
    """Return whether ``n1/d1 < n2/d2`` for canonical pairs.

    Walks the continued-fraction expansions of both values in lock step and
    stops at the first differing term, so no intermediate value exceeds the
    magnitude of the operands.
    """
    # divmod floors, so remainders are non-negative for positive denominators.
    q1, r1 = divmod(n1, d1)
    q2, r2 = divmod(n2, d2)
    reverse = False

    while True:
        if q1 != q2:
            return q1 > q2 if reverse else q1 < q2

        reverse = not reverse

        if r1 == 0 or r2 == 0:
            break

        n1, d1 = d1, r1
        n2, d2 = d2, r2
        q1, r1 = divmod(n1, d1)
        q2, r2 = divmod(n2, d2)

    if r1 == r2:
        return False
    return (r1 != 0) != reverse


class Rational:
    """Exact rational number held in canonical form over an integer primitive.

    ``Rational(n, d, dtype=numpy.int32)`` stores ``n/d`` reduced, with a
    positive denominator, and every arithmetic result is checked against the
    range of the chosen primitive. In-place operators mutate the receiver and
    leave it untouched when they fail.
    """

    __slots__ = ("_numerator", "_denominator", "_primitive")
    __array_priority__ = 1000.0  # Prefer Rational semantics in NumPy expressions.
    __hash__ = None  # Mutable through the in-place operators.

    def __init__(
        self,
        numerator: numbers.Integral = 0,
        denominator: numbers.Integral = 1,
        *,
        dtype: DTypeLike = None,
    ) -> None:
        primitive = primitive_for(dtype)
        num = primitive.coerce(numerator, name="numerator")
        den = primitive.coerce(denominator, name="denominator")
        self._numerator, self._denominator = normalize(num, den, primitive)
        self._primitive = primitive

    @classmethod
    def _from_canonical(cls, numerator: int, denominator: int, primitive: Primitive) -> "Rational":
        obj = cls.__new__(cls)
        obj._numerator = numerator
        obj._denominator = denominator
        obj._primitive = primitive
        return obj

    # ------------------------------------------------------------------
    # Constructors
    @classmethod
    def from_fraction(cls, value: Fraction, *, dtype: DTypeLike = None) -> "Rational":
        """Create a :class:`Rational` equal to a :class:`fractions.Fraction`."""
        return cls(value.numerator, value.denominator, dtype=dtype)

    @classmethod
    def from_float(cls, value: float, *, dtype: DTypeLike = None) -> "Rational":
        """Return the exact binary value of a finite float."""
        if isinstance(value, bool):  # bool is a subclass of int; treat explicitly.
            return cls(int(value), 1, dtype=dtype)
        value = float(value)
        if math.isnan(value) or math.isinf(value):
            raise ValueError("cannot convert NaN or infinity to Rational")
        numerator, denominator = value.as_integer_ratio()
        return cls(numerator, denominator, dtype=dtype)

    @classmethod
    def parse(cls, text: str, *, dtype: DTypeLike = None) -> "Rational":
        """Read ``"n"`` or ``"n/d"``; invalid values surface as :class:`RationalParseError`."""
        numerator, denominator = codec.scan(text)
        try:
            return cls(numerator, denominator, dtype=dtype)
        except (ZeroDenominatorError, RationalOverflowError) as exc:
            LOG.debug("rejected rational text %r: %s", text, exc)
            raise RationalParseError(f"cannot parse {text!r} as a rational: {exc}") from exc

    @classmethod
    def rationalize(cls, value: Any, *, dtype: DTypeLike = None) -> "Rational":
        """Coerce a numeric-like value into :class:`Rational` without approximation."""
        if isinstance(value, Rational):
            if dtype is None or primitive_for(dtype) == value._primitive:
                return value.copy()
            return value.reinterpret(dtype)
        if isinstance(value, Fraction):
            return cls.from_fraction(value, dtype=dtype)
        if isinstance(value, numbers.Integral):
            return cls(int(value), 1, dtype=dtype)
        if isinstance(value, np.generic):
            return cls.rationalize(value.item(), dtype=dtype)
        if isinstance(value, numbers.Real):
            return cls.from_float(float(value), dtype=dtype)
        if isinstance(value, str):
            return cls.parse(value, dtype=dtype)
        raise TypeError(f"Cannot convert {type(value)!r} to Rational")

    # ------------------------------------------------------------------
    # Properties and helpers
    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    @property
    def dtype(self) -> np.dtype:
        return self._primitive.dtype

    @property
    def primitive(self) -> Primitive:
        return self._primitive

    def copy(self) -> "Rational":
        return Rational._from_canonical(self._numerator, self._denominator, self._primitive)

    __copy__ = copy

    def __deepcopy__(self, memo: dict) -> "Rational":
        return self.copy()

    def assign(self, numerator: numbers.Integral, denominator: numbers.Integral = 1) -> "Rational":
        """Replace the value with ``Rational(numerator, denominator)`` of the same dtype."""
        primitive = self._primitive
        num = primitive.coerce(numerator, name="numerator")
        den = primitive.coerce(denominator, name="denominator")
        self._commit(*normalize(num, den, primitive))
        return self

    def _commit(self, numerator: int, denominator: int) -> None:
        self._numerator = numerator
        self._denominator = denominator

    # ------------------------------------------------------------------
    # Conversions
    def reinterpret(self, dtype: DTypeLike) -> "Rational":
        """Return this value over another primitive without renormalizing.

        Raises :class:`DenormalizedConversionError` when the pair is not
        representable in *dtype* or is not already canonical there. Use
        ``Rational(r.numerator, r.denominator, dtype=...)`` to renormalize.
        """
        target = primitive_for(dtype)
        num, den = self._numerator, self._denominator
        if not (target.contains(num) and target.contains(den) and is_normalized(num, den)):
            LOG.debug("refused to reinterpret %s/%s as %s", num, den, target.dtype.name)
            raise DenormalizedConversionError(
                f"bad rational: denormalized conversion of {num}/{den} to {target.dtype.name}"
            )
        return Rational._from_canonical(num, den, target)

    def cast(self, target: DTypeLike = float) -> Any:
        """Return ``numerator / denominator`` computed in a floating type."""
        if target is float:
            return self._numerator / self._denominator
        dtype = np.dtype(target)
        if not np.issubdtype(dtype, np.floating):
            raise TypeError(f"cast target must be a floating type, got {dtype!r}")
        return dtype.type(self._numerator) / dtype.type(self._denominator)

    def as_fraction(self) -> Fraction:
        """Return a :class:`Fraction` with the same value."""
        return Fraction(self._numerator, self._denominator)

    def __float__(self) -> float:
        return self.cast(float)

    def __trunc__(self) -> int:
        if self._numerator < 0:
            return -(-self._numerator // self._denominator)
        return self._numerator // self._denominator

    def __floor__(self) -> int:
        return self._numerator // self._denominator

    def __ceil__(self) -> int:
        return -(-self._numerator // self._denominator)

    def __int__(self) -> int:
        return self.__trunc__()

    def __bool__(self) -> bool:
        return self._numerator != 0

    # ------------------------------------------------------------------
    # Representation
    def __repr__(self) -> str:
        if self._primitive.dtype == np.dtype(DEFAULT_DTYPE):
            return f"Rational({self._numerator}, {self._denominator})"
        return f"Rational({self._numerator}, {self._denominator}, dtype={self._primitive.dtype.name})"

    def __str__(self) -> str:
        return codec.render(self._numerator, self._denominator)

    def __format__(self, format_spec: str) -> str:
        if codec.is_float_spec(format_spec):
            return format(float(self), format_spec)
        return codec.render(self._numerator, self._denominator, format_spec)

    # ------------------------------------------------------------------
    # Internal helpers
    def _check_compatible(self, other: "Rational") -> None:
        if other._primitive != self._primitive:
            raise TypeError(
                f"cannot combine {self.dtype.name} and {other.dtype.name} rationals; "
                "use reinterpret() to convert one of them"
            )

    def _coerce_operand(self, value: Any, *, comparison: bool = False) -> "Rational":
        """Convert an exact operand to a :class:`Rational` over this primitive.

        Comparisons accept rationals over any primitive, arithmetic does not.
        """
        if isinstance(value, Rational):
            if not comparison:
                self._check_compatible(value)
            return value
        if isinstance(value, Fraction):
            return Rational.from_fraction(value, dtype=self._primitive)
        if isinstance(value, numbers.Integral):
            return Rational(int(value), 1, dtype=self._primitive)
        raise TypeError(f"Cannot interpret {type(value)!r} as Rational")

    def _elementwise(self, array: np.ndarray, op: Callable, *, reflected: bool = False) -> np.ndarray:
        comparison = op in _COMPARISONS

        def apply(x: Any) -> Any:
            operand = self._coerce_operand(x, comparison=comparison)
            if reflected:
                return op(operand, self)
            return op(self, operand)

        return np.vectorize(apply, otypes=[object])(array)

    def _apply(self, other: Any, rational_op: Callable, integer_op: Callable) -> Any:
        """Run an in-place operation against *other*, or return ``NotImplemented``."""
        if isinstance(other, Rational):
            self._check_compatible(other)
            result = rational_op(other._numerator, other._denominator)
        elif isinstance(other, numbers.Integral):
            result = integer_op(self._primitive.coerce(other, name="operand"))
        elif isinstance(other, Fraction):
            operand = Rational.from_fraction(other, dtype=self._primitive)
            result = rational_op(operand._numerator, operand._denominator)
        else:
            return NotImplemented
        self._commit(*result)
        return self

    # ------------------------------------------------------------------
    # Arithmetic engine
    def _sum(self, n2: int, d2: int, combine: Callable[[int, int], int]) -> Tuple[int, int]:
        p = self._primitive
        n1, d1 = self._numerator, self._denominator
        g = gcd(d1, d2)
        d1 //= g
        n = combine(p.mul(n1, d2 // g), p.mul(n2, d1))
        g2 = iabs(gcd(n, g))
        return n // g2, p.mul(d1, d2 // g2)

    def _sum_integer(self, i: int, combine: Callable[[int, int], int]) -> Tuple[int, int]:
        p = self._primitive
        return combine(self._numerator, p.mul(i, self._denominator)), self._denominator

    def _product(self, n2: int, d2: int) -> Tuple[int, int]:
        p = self._primitive
        n1, d1 = self._numerator, self._denominator
        gcd1 = iabs(gcd(n1, d2))
        gcd2 = iabs(gcd(n2, d1))
        return p.mul(n1 // gcd1, n2 // gcd2), p.mul(d1 // gcd2, d2 // gcd1)

    def _product_integer(self, i: int) -> Tuple[int, int]:
        g = iabs(gcd(i, self._denominator))
        return self._primitive.mul(self._numerator, i // g), self._denominator // g

    def _quotient(self, n2: int, d2: int) -> Tuple[int, int]:
        if n2 == 0:
            raise DivisionByZeroError()
        p = self._primitive
        n1, d1 = self._numerator, self._denominator
        if n1 == 0:
            return n1, d1

        gcd1 = iabs(gcd(n1, n2))
        gcd2 = iabs(gcd(d2, d1))
        num = p.mul(n1 // gcd1, d2 // gcd2)
        den = p.mul(d1 // gcd2, n2 // gcd1)
        if den < 0:
            num, den = p.neg(num), p.neg(den)
        return num, den

    def _quotient_integer(self, i: int) -> Tuple[int, int]:
        if i == 0:
            raise DivisionByZeroError()
        p = self._primitive
        n1, d1 = self._numerator, self._denominator
        if n1 == 0:
            return n1, d1

        g = iabs(gcd(n1, i))
        num = n1 // g
        den = p.mul(d1, i // g)
        if den < 0:
            num, den = p.neg(num), p.neg(den)
        return num, den

    def __iadd__(self, other: Any) -> "Rational":
        add = self._primitive.add
        return self._apply(
            other,
            lambda n, d: self._sum(n, d, add),
            lambda i: self._sum_integer(i, add),
        )

    def __isub__(self, other: Any) -> "Rational":
        sub = self._primitive.sub
        return self._apply(
            other,
            lambda n, d: self._sum(n, d, sub),
            lambda i: self._sum_integer(i, sub),
        )

    def __imul__(self, other: Any) -> "Rational":
        return self._apply(other, self._product, self._product_integer)

    def __itruediv__(self, other: Any) -> "Rational":
        return self._apply(other, self._quotient, self._quotient_integer)

    def __ipow__(self, exponent: Any) -> "Rational":
        power = self._coerce_power(exponent)
        base = self.copy()
        if power < 0:
            if self._numerator == 0:
                raise DivisionByZeroError("0 cannot be raised to a negative power")
            base = Rational._from_canonical(1, 1, self._primitive) / base
            power = -power

        result = Rational._from_canonical(1, 1, self._primitive)
        while power:
            if power & 1:
                result *= base
            power >>= 1
            if power:
                base *= base
        self._commit(result._numerator, result._denominator)
        return self

    def _coerce_power(self, value: Any) -> int:
        if isinstance(value, numbers.Integral):
            return int(value)
        if isinstance(value, Rational):
            if value.denominator != 1:
                raise ValueError("Exponent must be an integer")
            return value.numerator
        if isinstance(value, np.generic):
            return self._coerce_power(value.item())
        if isinstance(value, numbers.Real):
            if not float(value).is_integer():
                raise ValueError("Exponent must be an integer")
            return int(value)
        raise TypeError("Unsupported exponent type")

    def increment(self) -> "Rational":
        """Add one in place and return ``self``."""
        self._commit(self._primitive.add(self._numerator, self._denominator), self._denominator)
        return self

    def decrement(self) -> "Rational":
        """Subtract one in place and return ``self``."""
        self._commit(self._primitive.sub(self._numerator, self._denominator), self._denominator)
        return self

    def post_increment(self) -> "Rational":
        """Add one in place and return a copy of the prior value."""
        prior = self.copy()
        self.increment()
        return prior

    def post_decrement(self) -> "Rational":
        """Subtract one in place and return a copy of the prior value."""
        prior = self.copy()
        self.decrement()
        return prior

    # ------------------------------------------------------------------
    # Arithmetic operators
    def __add__(self, other: Any) -> Any:
        if isinstance(other, np.ndarray):
            return self._elementwise(other, operator.add)
        return self.copy().__iadd__(other)

    def __radd__(self, other: Any) -> Any:
        return self.__add__(other)

    def __sub__(self, other: Any) -> Any:
        if isinstance(other, np.ndarray):
            return self._elementwise(other, operator.sub)
        return self.copy().__isub__(other)

    def __rsub__(self, other: Any) -> Any:
        if isinstance(other, np.ndarray):
            return self._elementwise(other, operator.sub, reflected=True)
        if isinstance(other, (numbers.Integral, Fraction)):
            return self._coerce_operand(other).__sub__(self)
        return NotImplemented

    def __mul__(self, other: Any) -> Any:
        if isinstance(other, np.ndarray):
            return self._elementwise(other, operator.mul)
        return self.copy().__imul__(other)

    def __rmul__(self, other: Any) -> Any:
        return self.__mul__(other)

    def __truediv__(self, other: Any) -> Any:
        if isinstance(other, np.ndarray):
            return self._elementwise(other, operator.truediv)
        return self.copy().__itruediv__(other)

    def __rtruediv__(self, other: Any) -> Any:
        if isinstance(other, np.ndarray):
            return self._elementwise(other, operator.truediv, reflected=True)
        if isinstance(other, (numbers.Integral, Fraction)):
            return self._coerce_operand(other).__truediv__(self)
        return NotImplemented

    def __pow__(self, exponent: Any) -> Any:
        if isinstance(exponent, np.ndarray):
            vectorised = np.vectorize(lambda x: self.__pow__(x), otypes=[object])
            return vectorised(exponent)
        return self.copy().__ipow__(exponent)

    def __neg__(self) -> "Rational":
        return Rational._from_canonical(
            self._primitive.neg(self._numerator), self._denominator, self._primitive
        )

    def __pos__(self) -> "Rational":
        return self.copy()

    def __abs__(self) -> "Rational":
        return self.copy() if self._numerator >= 0 else -self

    # ------------------------------------------------------------------
    # Comparisons
    def _pair(self, other: Any) -> Optional[Tuple[int, int]]:
        if isinstance(other, Rational):
            return other._numerator, other._denominator
        if isinstance(other, Fraction):
            return other.numerator, other.denominator
        return None

    def __eq__(self, other: Any) -> Any:
        if isinstance(other, np.ndarray):
            return self._elementwise(other, operator.eq)
        if isinstance(other, numbers.Integral):
            return self._denominator == 1 and self._numerator == int(other)
        pair = self._pair(other)
        if pair is None:
            return NotImplemented
        return (self._numerator, self._denominator) == pair

    def __ne__(self, other: Any) -> Any:
        if isinstance(other, np.ndarray):
            return self._elementwise(other, operator.ne)
        equal = self.__eq__(other)
        if equal is NotImplemented:
            return NotImplemented
        return not equal

    def __lt__(self, other: Any) -> Any:
        if isinstance(other, np.ndarray):
            return self._elementwise(other, operator.lt)
        if isinstance(other, numbers.Integral):
            return self.__floor__() < int(other)
        pair = self._pair(other)
        if pair is None:
            return NotImplemented
        return less_than(self._numerator, self._denominator, *pair)

    def __gt__(self, other: Any) -> Any:
        if isinstance(other, np.ndarray):
            return self._elementwise(other, operator.gt)
        less = self.__lt__(other)
        if less is NotImplemented:
            return NotImplemented
        return not less and not self.__eq__(other)

    def __le__(self, other: Any) -> Any:
        if isinstance(other, np.ndarray):
            return self._elementwise(other, operator.le)
        less = self.__lt__(other)
        if less is NotImplemented:
            return NotImplemented
        return less or self.__eq__(other)

    def __ge__(self, other: Any) -> Any:
        if isinstance(other, np.ndarray):
            return self._elementwise(other, operator.ge)
        less = self.__lt__(other)
        if less is NotImplemented:
            return NotImplemented
        return not less

    # ------------------------------------------------------------------
    # NumPy interoperability
    _UFUNC_DISPATCH = {
        np.add: operator.add,
        np.subtract: operator.sub,
        np.multiply: operator.mul,
        np.divide: operator.truediv,
        np.true_divide: operator.truediv,
        np.negative: operator.neg,
        np.positive: operator.pos,
        np.absolute: abs,
        np.power: operator.pow,
        np.less: operator.lt,
        np.less_equal: operator.le,
        np.greater: operator.gt,
        np.greater_equal: operator.ge,
        np.equal: operator.eq,
        np.not_equal: operator.ne,
    }

    def __array_ufunc__(self, ufunc, method, *inputs, **kwargs):
        if method != "__call__":
            return NotImplemented
        if kwargs.get("out") is not None:
            raise NotImplementedError("`out` argument is not supported for Rational ufuncs")
        op = self._UFUNC_DISPATCH.get(ufunc)
        if op is None:
            return NotImplemented

        comparison = op in _COMPARISONS

        def coerce(value: Any) -> "Rational":
            return self._coerce_operand(value, comparison=comparison)

        coerced = []
        has_array = False
        for value in inputs:
            if isinstance(value, Rational):
                coerced.append(value)
            elif isinstance(value, np.ndarray):
                vectorised = np.vectorize(coerce, otypes=[object])
                coerced.append(vectorised(value))
                has_array = True
            else:
                coerced.append(coerce(value))
        if has_array:
            vectorised = np.vectorize(lambda *args: op(*args), otypes=[object])
            return vectorised(*coerced)
        return op(*coerced)


def parse_rational(text: str, *, dtype: DTypeLike = None) -> Rational:
    """Public helper to read ``"n"`` or ``"n/d"`` into a :class:`Rational`."""

    return Rational.parse(text, dtype=dtype)


def rationalize(value: NumberLike, *, dtype: DTypeLike = None) -> Rational:
    """Public helper to convert *value* into :class:`Rational`."""

    return Rational.rationalize(value, dtype=dtype)


__all__ = [
    "Rational",
    "is_normalized",
    "less_than",
    "normalize",
    "parse_rational",
    "rationalize",
]
