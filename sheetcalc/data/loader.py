"""
Upload parsing: format sniffing, CSV and workbook readers, header derivation.
"""
from __future__ import annotations

import csv
import datetime as dt
import io
import math

import pandas as pd

from sheetcalc.config import CSV_ENCODINGS, MAX_UPLOAD_BYTES, PLACEHOLDER_HEADER, SUPPORTED_EXTENSIONS
from sheetcalc.data.schemas import FileFormat, Table
from sheetcalc.errors import EmptyInputError, ParseError, UnsupportedFormatError


# ---------------------------------------------------------------------------
# Format sniffing
# ---------------------------------------------------------------------------

def sniff_format(filename: str) -> FileFormat:
    """Pick the reader from the text after the last "." (case-insensitive)."""
    _, dot, ext = (filename or "").rpartition(".")
    kind = SUPPORTED_EXTENSIONS.get(ext.lower()) if dot else None
    if kind is None:
        raise UnsupportedFormatError(filename)
    return FileFormat(kind)


# ---------------------------------------------------------------------------
# Headers
# ---------------------------------------------------------------------------

def derive_headers(first_row: list[str]) -> tuple[str, ...]:
    """Trim header cells and name blank ones ``Column_<n>`` (1-based).

    Duplicates are kept as-is; lookups take the first match.
    """
    headers = []
    for i, cell in enumerate(first_row):
        name = cell.strip()
        headers.append(name or PLACEHOLDER_HEADER.format(i + 1))
    return tuple(headers)


def _build_table(rows: list[list[str]], source: str) -> Table:
    if not rows:
        raise EmptyInputError(f"empty {source}")
    headers = derive_headers(rows[0])
    if not headers:
        raise ParseError(f"{source} header row has no cells")
    body = tuple(tuple(r) for r in rows[1:])
    return Table(headers=headers, rows=body)


# ---------------------------------------------------------------------------
# CSV
# ---------------------------------------------------------------------------

# A single cell may be as large as the whole upload.
csv.field_size_limit(max(MAX_UPLOAD_BYTES, csv.field_size_limit()))


def _decode(content: bytes) -> str:
    for encoding in CSV_ENCODINGS:
        try:
            return content.decode(encoding)
        except UnicodeDecodeError:
            continue
    raise ParseError("could not decode CSV with any supported encoding")


def read_csv_rows(content: bytes) -> list[list[str]]:
    """Tokenise CSV bytes into ragged rows of raw strings.

    Blank lines are dropped; rows keep whatever field count they have.
    A quote inside an unquoted field is kept as a literal character.
    """
    text = _decode(content)
    reader = csv.reader(io.StringIO(text, newline=""), strict=True)
    try:
        return [row for row in reader if row]
    except csv.Error as exc:
        raise ParseError(f"line {reader.line_num}: {exc}") from exc


def parse_csv(content: bytes) -> Table:
    return _build_table(read_csv_rows(content), "CSV")


# ---------------------------------------------------------------------------
# Workbooks (.xlsx via openpyxl, .xls via xlrd, both through pandas)
# ---------------------------------------------------------------------------

def cell_text(value) -> str:
    """Render a workbook cell the way a spreadsheet would display it."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return ""
    if isinstance(value, float):
        if math.isinf(value):
            return str(value)
        if value.is_integer():
            return str(int(value))
        return f"{value:.15g}"
    if isinstance(value, dt.datetime):
        if value.time() == dt.time(0, 0):
            return value.date().isoformat()
        return value.isoformat(sep=" ")
    if isinstance(value, dt.date):
        return value.isoformat()
    return str(value)


def _trim_trailing_blanks(cells: list[str]) -> list[str]:
    end = len(cells)
    while end and cells[end - 1] == "":
        end -= 1
    return cells[:end]


def read_workbook_rows(content: bytes) -> list[list[str]]:
    """Rows of the first sheet (by position) as display strings.

    Trailing empty cells are trimmed from each row. Blank rows between data
    rows are kept as empty rows; blank rows after the last data row are not.
    """
    try:
        with pd.ExcelFile(io.BytesIO(content)) as book:
            if not book.sheet_names:
                raise ParseError("workbook has no sheets")
            frame = book.parse(book.sheet_names[0], header=None, dtype=object, na_filter=False)
    except ParseError:
        raise
    except Exception as exc:
        raise ParseError(str(exc) or type(exc).__name__) from exc

    rows = [_trim_trailing_blanks([cell_text(v) for v in record])
            for record in frame.itertuples(index=False, name=None)]
    while rows and not rows[-1]:
        rows.pop()
    return rows


def parse_workbook(content: bytes) -> Table:
    return _build_table(read_workbook_rows(content), "workbook")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def parse_table(content: bytes, filename: str) -> Table:
    """Parse upload bytes into a Table, choosing the reader from ``filename``."""
    fmt = sniff_format(filename)
    if fmt == FileFormat.CSV:
        return parse_csv(content)
    return parse_workbook(content)
