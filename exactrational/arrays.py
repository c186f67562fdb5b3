"""Helpers for building NumPy object arrays of :class:`~exactrational.Rational`."""
from __future__ import annotations

import numbers
from typing import Any, Sequence, Union

import numpy as np

from .rational import DTypeLike, Rational

ShapeLike = Union[int, Sequence[int]]


def as_rational_array(
    values: Any,
    *,
    dtype: DTypeLike = None,
    copy: bool = True,
) -> np.ndarray:
    """Return a ``numpy.ndarray`` of :class:`Rational` values.

    ``values`` can be any iterable containing exact numeric entries (integers,
    fractions, rationals, finite floats or rational text) or an existing NumPy
    array. When ``copy`` is ``False`` and ``values`` is already an object array
    whose elements are all :class:`Rational`, the original array is returned.
    ``dtype`` selects the integer primitive of the elements, not the array dtype.
    """

    if isinstance(values, np.ndarray):
        array = values.copy() if copy else values
        if array.dtype != object:
            array = array.astype(object, copy=False)
        if not copy and dtype is None and all(isinstance(item, Rational) for item in array.flat):
            return array
        vectorised = np.vectorize(
            lambda item: Rational.rationalize(item, dtype=dtype),
            otypes=[object],
        )
        return vectorised(array)

    if isinstance(values, (list, tuple)):
        coerced = [Rational.rationalize(item, dtype=dtype) for item in values]
        result = np.empty(len(coerced), dtype=object)
        result[:] = coerced
        return result

    return as_rational_array(list(values), dtype=dtype, copy=copy)


def full(shape: ShapeLike, fill_value: Any, *, dtype: DTypeLike = None) -> np.ndarray:
    """Return an array of ``shape`` whose elements are independent copies of ``fill_value``."""

    shape = (shape,) if isinstance(shape, numbers.Integral) else tuple(shape)
    if any(extent < 0 for extent in shape):
        raise ValueError("array dimensions must be non-negative")
    template = Rational.rationalize(fill_value, dtype=dtype)
    result = np.empty(shape, dtype=object)
    for index in np.ndindex(*shape):
        result[index] = template.copy()
    return result


def zeros(shape: ShapeLike, *, dtype: DTypeLike = None) -> np.ndarray:
    """Return an array of ``shape`` (an int or a tuple) filled with zeros."""

    return full(shape, 0, dtype=dtype)


def zeros_like(values: Any, *, dtype: DTypeLike = None) -> np.ndarray:
    """Return a zero-filled array that matches the shape of ``values``.

    Without ``dtype`` the zeros take the primitive of the first element.
    """

    array = as_rational_array(values)
    if dtype is None and array.size:
        dtype = array.flat[0].dtype
    return full(array.shape, 0, dtype=dtype)


__all__ = ["as_rational_array", "full", "zeros", "zeros_like"]
