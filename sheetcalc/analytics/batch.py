"""
Batch queries: one operation over several named columns.
"""
from __future__ import annotations

import logging
from typing import Iterable

from sheetcalc.analytics.aggregates import compute, resolve_column
from sheetcalc.data.schemas import BatchResult, CalculationResult, SkippedColumn, Table
from sheetcalc.errors import ComputeError

logger = logging.getLogger(__name__)


def run_batch(table: Table, columns: Iterable[str], operation: str) -> BatchResult:
    """Resolve and compute each requested column independently.

    A column that fails (unknown name, no numeric values, unsupported
    operation) lands in ``skipped`` with the reason and never aborts the
    rest. Deciding what an all-skipped batch means is left to the caller.
    """
    batch = BatchResult(operation=operation)
    for name in columns:
        try:
            index = resolve_column(table, name)
            value = compute(table, index, operation)
        except ComputeError as exc:
            logger.debug("Skipping column %r for %s: %s", name, operation, exc)
            batch.skipped.append(SkippedColumn(column=name, reason=str(exc)))
            continue
        batch.results.append(CalculationResult(column=name, value=value))
    return batch
