"""
JSON endpoints: health, upload validation, table summary, calculation.
"""
from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile
from starlette.concurrency import run_in_threadpool

from sheetcalc.api.dependencies import current_table, get_store
from sheetcalc.api.router_pages import ingest_upload, read_upload
from sheetcalc.api.response_models import (
    APIResponse, CalculateRequest, CalculateResponse, HealthResponse, TableSummary,
)
from sheetcalc.analytics.batch import run_batch
from sheetcalc.config import APP_VERSION
from sheetcalc.data.store import TableStore
from sheetcalc.errors import SheetCalcError

router = APIRouter(tags=["meta"])


@router.get("/health", response_model=HealthResponse)
def health(store: TableStore = Depends(get_store)):
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(timespec="seconds"),
        version=APP_VERSION,
        tables=len(store),
    )


@router.post("/api/validate", response_model=APIResponse)
async def validate_file(file: UploadFile = File(...)):
    """Check that an upload would be accepted, without storing it."""
    content, filename = await read_upload(file)
    try:
        table = await run_in_threadpool(ingest_upload, content, filename)
    except SheetCalcError as exc:
        return APIResponse(success=False, error=str(exc))
    summary = TableSummary.from_table(table)
    return APIResponse(success=True, data={"status": "File valid", **summary.model_dump()})


@router.get("/api/validate", response_model=APIResponse)
def validate_wrong_method():
    return APIResponse(success=False, error="Method not allowed")


@router.get("/api/table", response_model=TableSummary)
def table_summary(request: Request):
    """Summary of the table this session uploaded last."""
    table = current_table(request)
    if table is None:
        raise HTTPException(404, "No table uploaded")
    return TableSummary.from_table(table)


@router.post("/api/calculate", response_model=CalculateResponse)
def calculate_json(req: CalculateRequest, request: Request):
    """Batch calculation returning both computed and skipped columns."""
    table = current_table(request)
    if table is None:
        raise HTTPException(404, "No table uploaded")
    if not req.columns or not req.operation:
        raise HTTPException(400, "Invalid request")

    batch = run_batch(table, req.columns, req.operation)
    response = CalculateResponse.from_batch(batch, table)
    if not batch.ok:
        raise HTTPException(400, {
            "error": "No valid calculations",
            "skipped": [s.model_dump() for s in response.skipped],
        })
    return response
