"""
TableStore — In-memory tables keyed by session.

Each session holds at most one table: a new upload replaces the previous one
for that session only. Access goes through a single lock; stored tables are
immutable, so readers get a consistent snapshot without copying.
"""
from __future__ import annotations

import threading
from collections import OrderedDict
from typing import Optional

from sheetcalc.config import MAX_SESSIONS
from sheetcalc.data.schemas import Table


class TableStore:
    """Most recent table per session, least-recently-used sessions evicted."""

    def __init__(self, max_sessions: int = MAX_SESSIONS) -> None:
        self.max_sessions = max_sessions
        self._tables: OrderedDict[str, Table] = OrderedDict()
        self._lock = threading.Lock()
        self._evicted = 0

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def put(self, key: str, table: Table) -> None:
        """Store ``table`` for ``key``, replacing whatever was there."""
        with self._lock:
            self._tables[key] = table
            self._tables.move_to_end(key)
            while len(self._tables) > self.max_sessions:
                self._tables.popitem(last=False)
                self._evicted += 1

    def discard(self, key: str) -> None:
        with self._lock:
            self._tables.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._tables.clear()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, key: str | None) -> Optional[Table]:
        if key is None:
            return None
        with self._lock:
            table = self._tables.get(key)
            if table is not None:
                self._tables.move_to_end(key)
            return table

    def __len__(self) -> int:
        with self._lock:
            return len(self._tables)

    def snapshot_stats(self) -> dict:
        """Counts for the health endpoint."""
        with self._lock:
            return {
                "tables": len(self._tables),
                "rows": sum(t.row_count for t in self._tables.values()),
                "evicted": self._evicted,
            }
