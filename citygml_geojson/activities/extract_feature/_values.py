"""Typed value parsing for generic attributes and position lists.

Parsing is narrower than Python's ``int()`` /
``float()``: digit-group underscores, embedded whitespace and
non-decimal integer forms are rejected, so such a value is omitted from
the feature instead of being coerced.
"""

from __future__ import annotations

import re

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:inf|infinity|nan|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)",
    re.IGNORECASE,
)

# Signed 64-bit range of an intAttribute value
INT_MIN = -(2**63)
INT_MAX = 2**63 - 1


def parse_int(text: str) -> int | None:
    """Parse a base-10 signed 64-bit integer, or return ``None``."""
    if not _INT_RE.fullmatch(text):
        return None
    value = int(text)
    if not INT_MIN <= value <= INT_MAX:
        return None
    return value


def parse_float(text: str) -> float | None:
    """Parse a decimal or scientific floating-point number, or return ``None``."""
    if not _FLOAT_RE.fullmatch(text):
        return None
    return float(text)


def parse_pos_list(text: str) -> list[tuple[float, float]]:
    """Parse ``posList`` text into ``(easting, northing)`` pairs.

    Non-numeric tokens are filtered out of the flat token list *before*
    pairing, so a stray token shifts the pairing of everything after it.
    A trailing unpaired number is ignored.
    """
    numbers = [value for value in map(parse_float, text.split()) if value is not None]
    return [(numbers[i], numbers[i + 1]) for i in range(0, len(numbers) - 1, 2)]
