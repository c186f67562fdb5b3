"""Exact rational numbers over fixed-width integer primitives."""

from .arrays import as_rational_array, full, zeros, zeros_like
from .errors import (
    DenormalizedConversionError,
    DivisionByZeroError,
    RationalError,
    RationalOverflowError,
    RationalParseError,
    ZeroDenominatorError,
)
from .primitive import DEFAULT_DTYPE, Primitive, primitive_for
from .rational import Rational, less_than, normalize, parse_rational, rationalize

__all__ = [
    "Rational",
    "rationalize",
    "parse_rational",
    "normalize",
    "less_than",
    "Primitive",
    "primitive_for",
    "DEFAULT_DTYPE",
    "as_rational_array",
    "full",
    "zeros",
    "zeros_like",
    "RationalError",
    "ZeroDenominatorError",
    "DivisionByZeroError",
    "RationalOverflowError",
    "DenormalizedConversionError",
    "RationalParseError",
]
