"""
Error taxonomy for ingestion and statistics queries.

Parse-time errors abort a whole upload. Compute-time errors are per column
and get folded into the skipped list of a batch query.
"""
from __future__ import annotations


class SheetCalcError(Exception):
    """Base class for every error raised by sheetcalc."""


# ---------------------------------------------------------------------------
# Ingestion
# ---------------------------------------------------------------------------

class UnsupportedFormatError(SheetCalcError):
    """Filename extension is not csv, xlsx or xls."""

    def __init__(self, filename: str) -> None:
        super().__init__(f"Unsupported file type: {filename!r}")
        self.filename = filename


class ParseError(SheetCalcError):
    """Malformed CSV, unreadable workbook, or a workbook without usable rows."""


class EmptyInputError(ParseError):
    """The input yielded no rows at all, so there is no header row."""


class UploadRejectedError(SheetCalcError):
    """Upload refused by the ingestion flow (size cap, row cap, no numeric columns)."""


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------

class ComputeError(SheetCalcError):
    """A single-column statistic could not be produced."""


class ColumnNotFoundError(ComputeError):
    def __init__(self, column) -> None:
        super().__init__(f"Column not found: {column!r}")
        self.column = column


class NoNumericValuesError(ComputeError):
    def __init__(self, column_index: int) -> None:
        super().__init__(f"No numeric values in column {column_index}")
        self.column_index = column_index


class UnsupportedOperationError(ComputeError):
    def __init__(self, operation: str) -> None:
        super().__init__(f"Unsupported operation: {operation!r}")
        self.operation = operation
