"""
Pydantic request/response schemas for the JSON API.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel

from sheetcalc.api.pages import format_file_size
from sheetcalc.data.schemas import BatchResult, Table


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    version: str
    tables: int


class APIResponse(BaseModel):
    """Envelope used by /api/validate."""
    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None


class TableSummary(BaseModel):
    filename: Optional[str] = None
    size: str
    size_bytes: int
    uploaded_at: Optional[str] = None
    rows: int
    headers: list[str]
    numeric_columns: list[int]
    numeric_headers: list[str]

    @classmethod
    def from_table(cls, table: Table) -> "TableSummary":
        return cls(
            filename=table.filename,
            size=format_file_size(table.size_bytes),
            size_bytes=table.size_bytes,
            uploaded_at=table.uploaded_at.isoformat() if table.uploaded_at else None,
            rows=table.row_count,
            headers=list(table.headers),
            numeric_columns=table.numeric_indices,
            numeric_headers=table.numeric_headers,
        )


class CalculateRequest(BaseModel):
    columns: list[str]
    operation: str


class ResultItem(BaseModel):
    column: str
    value: float


class SkippedItem(BaseModel):
    column: str
    reason: str


class CalculateResponse(BaseModel):
    operation: str
    filename: Optional[str] = None
    results: list[ResultItem]
    skipped: list[SkippedItem]

    @classmethod
    def from_batch(cls, batch: BatchResult, table: Table) -> "CalculateResponse":
        return cls(
            operation=batch.operation,
            filename=table.filename,
            results=[ResultItem(column=r.column, value=r.value) for r in batch.results],
            skipped=[SkippedItem(column=s.column, reason=s.reason) for s in batch.skipped],
        )
