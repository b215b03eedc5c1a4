"""
Upload ingestion: size cap, parse, row cap, classify.

Every failure aborts the upload; nothing partial is returned.
"""
from __future__ import annotations

import datetime as dt
import logging
from typing import Optional

from sheetcalc.config import MAX_ROWS, MAX_UPLOAD_BYTES
from sheetcalc.data.classify import classify
from sheetcalc.data.loader import parse_table, sniff_format
from sheetcalc.data.schemas import Table
from sheetcalc.errors import UploadRejectedError

logger = logging.getLogger(__name__)


def ingest(
    content: bytes,
    filename: str,
    *,
    max_bytes: int = MAX_UPLOAD_BYTES,
    max_rows: int = MAX_ROWS,
    uploaded_at: Optional[dt.datetime] = None,
) -> Table:
    """Turn an upload into a classified Table ready for the store.

    Raises UnsupportedFormatError, ParseError (incl. EmptyInputError) or
    UploadRejectedError.
    """
    sniff_format(filename)
    if len(content) > max_bytes:
        raise UploadRejectedError("File too large")

    table = parse_table(content, filename)
    if table.row_count > max_rows:
        raise UploadRejectedError(f"Too many rows (> {max_rows})")

    numeric = classify(table)
    if not numeric:
        raise UploadRejectedError("No numeric columns found")

    table = table.with_numeric_columns(numeric).with_metadata(
        filename=filename,
        uploaded_at=uploaded_at or dt.datetime.now(),
        size_bytes=len(content),
    )
    logger.info(
        "Ingested %s: %d rows, %d columns, numeric=%s",
        filename, table.row_count, len(table.headers), table.numeric_headers,
    )
    return table
