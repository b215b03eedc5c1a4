"""
Aggregate engine: one statistic over one column of a Table.

Values are re-extracted from the raw cells on every call and do not depend on
``Table.numeric_columns``, so asking for a text column is legal and simply
finds few or no operands.
"""
from __future__ import annotations

import math
from typing import Callable

from sheetcalc.analytics.common import parse_number
from sheetcalc.data.schemas import Operation, Table
from sheetcalc.errors import ColumnNotFoundError, NoNumericValuesError, UnsupportedOperationError


# ---------------------------------------------------------------------------
# Column lookup & value extraction
# ---------------------------------------------------------------------------

def resolve_column(table: Table, name: str) -> int:
    """Index of the first header equal to ``name``."""
    index = table.column_index(name)
    if index is None:
        raise ColumnNotFoundError(name)
    return index


def extract_values(table: Table, column_index: int) -> list[float]:
    """Numeric operands for a column, in row order.

    Rows too short to reach the column, blank cells and non-numeric text are
    skipped without error.
    """
    values: list[float] = []
    for row in table.rows:
        if column_index >= len(row):
            continue
        value = parse_number(row[column_index])
        if value is not None:
            values.append(value)
    return values


# ---------------------------------------------------------------------------
# Statistics (operands are always non-empty here)
# ---------------------------------------------------------------------------

def row_sum(values: list[float]) -> float:
    """Left-to-right sum so rounding follows row order exactly."""
    total = 0.0
    for v in values:
        total += v
    return total


def average(values: list[float]) -> float:
    return row_sum(values) / len(values)


def median(values: list[float]) -> float:
    ordered = sorted(values)
    n = len(ordered)
    mid = n // 2
    if n % 2 == 0:
        return (ordered[mid - 1] + ordered[mid]) / 2
    return ordered[mid]


def minimum(values: list[float]) -> float:
    low = values[0]
    for v in values[1:]:
        if v < low:
            low = v
    return low


def maximum(values: list[float]) -> float:
    high = values[0]
    for v in values[1:]:
        if v > high:
            high = v
    return high


def count(values: list[float]) -> float:
    return float(len(values))


def sample_std(values: list[float]) -> float:
    """Sample standard deviation (n - 1 divisor); 0 for a single value."""
    n = len(values)
    if n <= 1:
        return 0.0
    mean = average(values)
    squares = 0.0
    for v in values:
        d = v - mean
        squares += d * d
    return math.sqrt(squares / (n - 1))


OPERATIONS: dict[Operation, Callable[[list[float]], float]] = {
    Operation.SUM: row_sum,
    Operation.AVERAGE: average,
    Operation.MEDIAN: median,
    Operation.MIN: minimum,
    Operation.MAX: maximum,
    Operation.COUNT: count,
    Operation.STD: sample_std,
}


def compute(table: Table, column_index: int, operation: Operation | str) -> float:
    """Run ``operation`` over the numeric cells of one column.

    An empty operand set raises NoNumericValuesError whatever the operation
    is, including ``count`` and unknown names.
    """
    if column_index < 0 or column_index >= len(table.headers):
        raise ColumnNotFoundError(column_index)

    values = extract_values(table, column_index)
    if not values:
        raise NoNumericValuesError(column_index)

    try:
        op = Operation(operation)
    except ValueError:
        raise UnsupportedOperationError(str(operation)) from None
    return OPERATIONS[op](values)
