"""
SheetCalc — FastAPI app factory.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from sheetcalc.api.dependencies import set_store
from sheetcalc.api.router_meta import router as meta_router
from sheetcalc.api.router_pages import router as pages_router
from sheetcalc.config import APP_VERSION, LOG_LEVEL, MAX_ROWS, MAX_SESSIONS, MAX_UPLOAD_BYTES
from sheetcalc.data.store import TableStore

logger = logging.getLogger(__name__)


def setup_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start with an empty table store."""
    setup_logging()
    set_store(TableStore(max_sessions=MAX_SESSIONS))
    logger.info(
        "SheetCalc %s ready — max upload %d bytes, max %d rows, %d sessions",
        APP_VERSION, MAX_UPLOAD_BYTES, MAX_ROWS, MAX_SESSIONS,
    )
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="SheetCalc",
        description="Upload a CSV or Excel file and compute column statistics",
        version=APP_VERSION,
        lifespan=lifespan,
    )

    app.include_router(pages_router)
    app.include_router(meta_router)

    static_dir = Path(__file__).parent / "static"
    if static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")

    return app


app = create_app()
