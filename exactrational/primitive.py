"""Fixed-width integer primitives backing :class:`~exactrational.Rational`."""
from __future__ import annotations

import functools
import numbers
from typing import Any

import numpy as np

from .errors import RationalOverflowError

DEFAULT_DTYPE = np.int64


def gcd(a: int, b: int) -> int:
    """Euclidean greatest common divisor; the sign of the result is unspecified."""
    while b != 0:
        a, b = b, a % b
    return a


def iabs(x: int) -> int:
    return -x if x < 0 else x


class Primitive:
    """Range-checked integer arithmetic for one NumPy signed integer dtype.

    Values are carried as Python ``int``; every operation that would store a
    result in the primitive checks it against ``numpy.iinfo`` limits and raises
    :class:`RationalOverflowError` rather than wrapping around.
    """

    __slots__ = ("dtype", "min", "max")

    def __init__(self, dtype: Any) -> None:
        dtype = np.dtype(dtype)
        if not np.issubdtype(dtype, np.signedinteger):
            raise TypeError(f"rational primitive must be a signed integer dtype, got {dtype!r}")
        info = np.iinfo(dtype)
        self.dtype = dtype
        self.min = int(info.min)
        self.max = int(info.max)

    def __repr__(self) -> str:
        return f"Primitive({self.dtype.name})"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Primitive):
            return self.dtype == other.dtype
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.dtype)

    def contains(self, value: int) -> bool:
        return self.min <= value <= self.max

    def check(self, value: int, what: str = "value") -> int:
        if not self.min <= value <= self.max:
            raise RationalOverflowError(
                f"{what} {value} is outside the {self.dtype.name} range "
                f"[{self.min}, {self.max}]"
            )
        return value

    def coerce(self, value: Any, *, name: str) -> int:
        """Convert an integral *value* to ``int`` and check that it is representable."""
        if isinstance(value, numbers.Integral):
            return self.check(int(value), name)
        raise TypeError(f"{name} must be an integer, got {type(value)!r}")

    def add(self, a: int, b: int) -> int:
        return self.check(a + b, "sum")

    def sub(self, a: int, b: int) -> int:
        return self.check(a - b, "difference")

    def mul(self, a: int, b: int) -> int:
        return self.check(a * b, "product")

    def neg(self, a: int) -> int:
        return self.check(-a, "negation")


@functools.lru_cache(maxsize=None)
def _primitive_for_dtype(dtype: np.dtype) -> Primitive:
    return Primitive(dtype)


def primitive_for(dtype: Any = None) -> Primitive:
    """Resolve a dtype specifier (``None`` selects :data:`DEFAULT_DTYPE`)."""
    if isinstance(dtype, Primitive):
        return dtype
    if dtype is None:
        dtype = DEFAULT_DTYPE
    try:
        resolved = np.dtype(dtype)
    except TypeError as exc:
        raise TypeError(f"cannot interpret {dtype!r} as an integer dtype") from exc
    return _primitive_for_dtype(resolved)


__all__ = ["DEFAULT_DTYPE", "Primitive", "gcd", "iabs", "primitive_for"]
