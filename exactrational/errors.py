"""Exceptions raised by :mod:`exactrational`."""
from __future__ import annotations


class RationalError(Exception):
    """Base class for every error raised while building or combining rationals."""


class ZeroDenominatorError(RationalError, ZeroDivisionError):
    """A numerator/denominator pair was given a zero denominator."""

    def __init__(self, message: str = "bad rational: zero denominator") -> None:
        super().__init__(message)


class DivisionByZeroError(RationalError, ZeroDivisionError):
    """A rational was divided by zero."""

    def __init__(self, message: str = "division by zero") -> None:
        super().__init__(message)


class RationalOverflowError(RationalError, OverflowError):
    """A value does not fit in the integer primitive backing the rational."""


class DenormalizedConversionError(RationalError, ValueError):
    """A reinterpretation would produce a pair that is not in canonical form."""

    def __init__(self, message: str = "bad rational: denormalized conversion") -> None:
        super().__init__(message)


class RationalParseError(RationalError, ValueError):
    """Text could not be read as a rational number."""


__all__ = [
    "RationalError",
    "ZeroDenominatorError",
    "DivisionByZeroError",
    "RationalOverflowError",
    "DenormalizedConversionError",
    "RationalParseError",
]
