"""Text encoding and decoding of rational numbers.

The canonical text of a rational is ``"n/d"``, or just ``"n"`` when the
denominator is one. :func:`scan` reads that text back into its integer
components and :func:`render` writes it, honoring a format specification in
which width and fill apply as they would to an integer: the ``/d`` suffix is
never signed or padded on its own.
"""
from __future__ import annotations

import logging
import re
from typing import Tuple

from .errors import RationalParseError

LOG = logging.getLogger(__name__)

_INTEGER = re.compile(r"[+-]?[0-9]+")
_LEADING_SPACE = re.compile(r"\s*")
_FORMAT_SPEC = re.compile(
    r"(?:(?P<fill>.)?(?P<align>[<>=^]))?"
    r"(?P<sign>[-+ ])?"
    r"(?P<zero>0)?"
    r"(?P<width>[0-9]+)?"
    r"[rR]?",
    re.DOTALL,
)
FLOAT_PRESENTATION_TYPES = frozenset("eEfFgG%")


def _reject(text: str, reason: str) -> RationalParseError:
    LOG.debug("rejected rational text %r: %s", text, reason)
    return RationalParseError(f"cannot parse {text!r} as a rational: {reason}")


def _to_int(text: str, digits: str, what: str) -> int:
    try:
        return int(digits)
    except ValueError as exc:
        # Digit runs past the interpreter's int conversion limit.
        raise _reject(text, f"{what} is too large") from exc


def scan(text: str) -> Tuple[int, int]:
    """Split *text* into ``(numerator, denominator)`` without normalizing.

    Leading and trailing whitespace is ignored, but none is allowed around
    the ``/`` separator. A bare integer reads as a denominator of one.
    """
    if not isinstance(text, str):
        raise TypeError(f"rational text must be str, got {type(text)!r}")

    pos = _LEADING_SPACE.match(text).end()
    match = _INTEGER.match(text, pos)
    if match is None:
        raise _reject(text, "expected an integer numerator")
    numerator = _to_int(text, match.group(), "numerator")
    pos = match.end()

    if pos == len(text) or text[pos:].isspace():
        return numerator, 1
    if text[pos] != "/":
        raise _reject(text, f"expected '/' after the numerator, found {text[pos]!r}")

    match = _INTEGER.match(text, pos + 1)
    if match is None:
        raise _reject(text, "expected an integer denominator after '/'")
    denominator = _to_int(text, match.group(), "denominator")
    rest = text[match.end():]
    if rest and not rest.isspace():
        raise _reject(text, f"unexpected trailing text {rest!r}")
    return numerator, denominator


def is_float_spec(format_spec: str) -> bool:
    """Whether *format_spec* asks for a floating-point presentation."""
    return bool(format_spec) and format_spec[-1] in FLOAT_PRESENTATION_TYPES


def render(numerator: int, denominator: int, format_spec: str = "") -> str:
    """Return the canonical text of ``numerator/denominator`` formatted per *format_spec*.

    The spec grammar is ``[[fill]align][sign][0][width][r]``. ``<``, ``>``
    (default) and ``^`` pad the whole text; ``=`` (or a leading ``0``) pads
    between the numerator's sign and its digits so the full text reaches
    *width*.
    """
    tail = "" if denominator == 1 else f"/{denominator}"
    if not format_spec:
        return f"{numerator}{tail}"

    spec = _FORMAT_SPEC.fullmatch(format_spec)
    if spec is None:
        raise ValueError(f"invalid format specifier {format_spec!r} for a rational")

    fill = spec.group("fill") or " "
    align = spec.group("align")
    sign = spec.group("sign") or "-"
    width = int(spec.group("width") or 0)
    if spec.group("zero") and align is None:
        fill, align = "0", "="

    if align == "=":
        head_width = width - len(tail)
        head_spec = f"{fill}={sign}{head_width}" if head_width > 0 else sign
        return format(numerator, head_spec) + tail

    text = format(numerator, sign) + tail
    if width:
        text = format(text, f"{fill}{align or '>'}{width}")
    return text


__all__ = ["scan", "render", "is_float_spec"]
