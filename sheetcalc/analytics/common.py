"""
Numeric helpers shared by the column classifier and the aggregate engine.

Both sides decide "is this cell a number" through ``parse_number`` so their
answers cannot drift apart.
"""
from __future__ import annotations

import math
import re

# Plain decimal notation: optional sign, digits with optional fraction, optional exponent.
# Rejects "nan", "inf", hex floats, digit-group underscores and non-ASCII digits,
# all of which float() would accept.
_NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def parse_number(cell: str) -> float | None:
    """Trim a raw cell and parse it as a float.

    Returns None for blank cells, non-numeric text, and values that overflow
    to infinity (e.g. "1e999").
    """
    text = cell.strip()
    if not text or not _NUMBER_RE.fullmatch(text):
        return None
    value = float(text)
    if math.isinf(value):
        return None
    return value


def is_blank(cell: str) -> bool:
    return not cell.strip()


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Divide safely, returning default if denominator is zero."""
    if denominator == 0:
        return default
    return numerator / denominator
