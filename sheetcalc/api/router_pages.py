"""
HTML endpoints: upload form, table display, calculation results.
"""
from __future__ import annotations

import logging
from datetime import datetime

from fastapi import APIRouter, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import HTMLResponse, RedirectResponse
from starlette.concurrency import run_in_threadpool

from sheetcalc.api.dependencies import (
    attach_session, current_table, get_session_id, get_store, new_session_id,
)
from sheetcalc.api.pages import display_page, results_page, upload_page
from sheetcalc.analytics.batch import run_batch
from sheetcalc.config import MAX_ROWS, MAX_UPLOAD_BYTES
from sheetcalc.data.ingest import ingest
from sheetcalc.data.schemas import FileFormat, Table
from sheetcalc.data.loader import sniff_format
from sheetcalc.errors import ParseError, UnsupportedFormatError, UploadRejectedError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"])

_NO_CACHE = {"Cache-Control": "no-cache"}


async def read_upload(file: UploadFile) -> tuple[bytes, str]:
    """Read at most one byte past the cap so oversize uploads are detectable."""
    if not file.filename:
        raise HTTPException(400, "Failed to read file")
    content = await file.read(MAX_UPLOAD_BYTES + 1)
    return content, file.filename


def ingest_upload(content: bytes, filename: str) -> Table:
    """Ingest with the configured upload caps."""
    return ingest(content, filename, max_bytes=MAX_UPLOAD_BYTES, max_rows=MAX_ROWS)


def ingest_or_400(content: bytes, filename: str) -> Table:
    """Run ingestion, mapping failures to the user-facing 400 messages."""
    try:
        fmt = sniff_format(filename)
    except UnsupportedFormatError:
        logger.warning("Rejected %r: unsupported file type", filename)
        raise HTTPException(400, "Invalid file type")

    try:
        return ingest_upload(content, filename)
    except ParseError as exc:
        label = "CSV" if fmt == FileFormat.CSV else "Excel"
        logger.warning("Rejected %r: %s", filename, exc)
        raise HTTPException(400, f"{label} error: {exc}")
    except UploadRejectedError as exc:
        logger.warning("Rejected %r: %s", filename, exc)
        raise HTTPException(400, str(exc))


@router.get("/", response_class=HTMLResponse)
def index():
    return HTMLResponse(upload_page(), headers=_NO_CACHE)


@router.get("/display")
@router.get("/calculate")
def redirect_home():
    return RedirectResponse("/", status_code=303)


@router.post("/display", response_class=HTMLResponse)
async def display(request: Request, file: UploadFile = File(...)):
    """Ingest an upload, remember it for this session, and show it."""
    content, filename = await read_upload(file)
    table = await run_in_threadpool(ingest_or_400, content, filename)

    session_id = get_session_id(request) or new_session_id()
    get_store().put(session_id, table)

    response = HTMLResponse(display_page(table))
    return attach_session(response, session_id)


@router.post("/calculate", response_class=HTMLResponse)
def calculate(
    request: Request,
    cols: list[str] = Form([]),
    operation: str = Form(""),
):
    """Run one operation over the selected columns of this session's table."""
    table = current_table(request)
    if not cols or not operation or table is None:
        raise HTTPException(400, "Invalid request")

    batch = run_batch(table, cols, operation)
    if not batch.ok:
        raise HTTPException(400, "No valid calculations")

    return HTMLResponse(results_page(batch, table, datetime.now()))
