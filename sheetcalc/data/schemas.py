"""
Table and query result schemas.
"""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional


class FileFormat(str, Enum):
    CSV = "csv"
    WORKBOOK = "workbook"


class Operation(str, Enum):
    SUM = "sum"
    AVERAGE = "average"
    MEDIAN = "median"
    MIN = "min"
    MAX = "max"
    COUNT = "count"
    STD = "std"

    @property
    def label(self) -> str:
        """Title-cased name for result pages ("Average", "Std")."""
        return self.value.title()


@dataclass(frozen=True)
class Table:
    """One uploaded spreadsheet: header row plus ragged body rows of raw strings.

    Cells are stored exactly as read (untrimmed). Rows may be shorter or
    longer than ``headers``. Instances are immutable, so a stored table can
    be handed to concurrent readers without copying.
    """
    headers: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...] = ()
    numeric_columns: frozenset[int] = frozenset()
    # Display-only metadata
    filename: Optional[str] = None
    uploaded_at: Optional[dt.datetime] = None
    size_bytes: int = 0

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def numeric_indices(self) -> list[int]:
        """Numeric column indices in ascending order."""
        return sorted(self.numeric_columns)

    @property
    def numeric_headers(self) -> list[str]:
        return [self.headers[i] for i in self.numeric_indices]

    def with_numeric_columns(self, columns) -> "Table":
        return replace(self, numeric_columns=frozenset(columns))

    def with_metadata(
        self,
        filename: Optional[str] = None,
        uploaded_at: Optional[dt.datetime] = None,
        size_bytes: int = 0,
    ) -> "Table":
        return replace(self, filename=filename, uploaded_at=uploaded_at, size_bytes=size_bytes)

    def column_index(self, name: str) -> int | None:
        """First header exactly equal to ``name``, lowest index wins."""
        for i, header in enumerate(self.headers):
            if header == name:
                return i
        return None


@dataclass(frozen=True)
class CalculationResult:
    column: str
    value: float


@dataclass(frozen=True)
class SkippedColumn:
    column: str
    reason: str


@dataclass
class BatchResult:
    """Outcome of one operation over several requested columns.

    ``results`` keeps request order; ``skipped`` lists the names that did not
    resolve or had nothing to compute over.
    """
    operation: str
    results: list[CalculationResult] = field(default_factory=list)
    skipped: list[SkippedColumn] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return bool(self.results)
