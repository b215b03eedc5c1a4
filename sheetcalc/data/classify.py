"""
Numeric column detection.
"""
from __future__ import annotations

from sheetcalc.analytics.common import is_blank, parse_number, safe_divide
from sheetcalc.config import NUMERIC_THRESHOLD
from sheetcalc.data.schemas import Table


def numeric_ratio(table: Table, column_index: int) -> tuple[int, int]:
    """Return (numeric, total) over the non-blank cells of one column.

    Rows too short to reach the column are ignored, as are blank cells.
    """
    numeric = 0
    total = 0
    for row in table.rows:
        if column_index >= len(row):
            continue
        cell = row[column_index]
        if is_blank(cell):
            continue
        total += 1
        if parse_number(cell) is not None:
            numeric += 1
    return numeric, total


def is_numeric_column(table: Table, column_index: int, threshold: float = NUMERIC_THRESHOLD) -> bool:
    """At least ``threshold`` of the non-blank cells parse as numbers.

    A column with no non-blank cells is never numeric.
    """
    numeric, total = numeric_ratio(table, column_index)
    if total == 0:
        return False
    return safe_divide(numeric, total) >= threshold


def classify(table: Table, threshold: float = NUMERIC_THRESHOLD) -> frozenset[int]:
    """Indices of the numeric columns among ``table.headers``."""
    return frozenset(
        i for i in range(len(table.headers)) if is_numeric_column(table, i, threshold)
    )
