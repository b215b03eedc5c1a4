"""Shared fixtures: sample uploads, table builders, a test client with a fresh store."""

import io

import pytest
from fastapi.testclient import TestClient
from openpyxl import Workbook

from sheetcalc.api.dependencies import set_store
from sheetcalc.data.schemas import Table
from sheetcalc.data.store import TableStore
from sheetcalc.main import app

SCORES_CSV = b"Name,Score,Notes\nAlice,10,ok\nBob,,missing\nCarol,30,\n"


def make_table(headers, rows, numeric=()) -> Table:
    """Build a Table from plain lists."""
    return Table(
        headers=tuple(headers),
        rows=tuple(tuple(r) for r in rows),
        numeric_columns=frozenset(numeric),
    )


def xlsx_bytes(rows, sheets=None) -> bytes:
    """Serialize rows into an in-memory .xlsx (first sheet), with optional extra sheets."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Data"
    for row in rows:
        ws.append(row)
    for name, extra_rows in (sheets or {}).items():
        extra = wb.create_sheet(name)
        for row in extra_rows:
            extra.append(row)
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


@pytest.fixture
def scores_csv() -> bytes:
    return SCORES_CSV


@pytest.fixture
def store() -> TableStore:
    return TableStore(max_sessions=8)


@pytest.fixture
def client(store: TableStore):
    """Test client backed by an empty store."""
    set_store(store)
    yield TestClient(app)
    set_store(None)
