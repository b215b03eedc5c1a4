"""
FastAPI dependencies — TableStore singleton, session identity.
"""
from __future__ import annotations

import secrets
from typing import Optional

from fastapi import HTTPException, Request, Response

from sheetcalc.config import SESSION_COOKIE
from sheetcalc.data.schemas import Table
from sheetcalc.data.store import TableStore

# ---------------------------------------------------------------------------
# Global store singleton (set during startup)
# ---------------------------------------------------------------------------
_store: TableStore | None = None


def set_store(store: TableStore) -> None:
    global _store
    _store = store


def get_store() -> TableStore:
    if _store is None:
        raise HTTPException(503, "Server not initialized yet")
    return _store


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------

def new_session_id() -> str:
    return secrets.token_hex(16)


def get_session_id(request: Request) -> Optional[str]:
    """Session key from the cookie, or None for a first-time visitor."""
    return request.cookies.get(SESSION_COOKIE) or None


def attach_session(response: Response, session_id: str) -> Response:
    response.set_cookie(SESSION_COOKIE, session_id, httponly=True, samesite="lax")
    return response


def current_table(request: Request) -> Optional[Table]:
    """The calling session's table, if it has uploaded one."""
    return get_store().get(get_session_id(request))
