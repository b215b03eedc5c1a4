#!/usr/bin/env python3
"""
SheetCalc CLI — inspect spreadsheets, run column statistics, start the web server.

USAGE:
  python -m sheetcalc.cli inspect data.csv                    # Headers, numeric columns, row count
  python -m sheetcalc.cli calc --op average data.xlsx Score   # One operation over columns
  python -m sheetcalc.cli calc --op sum data.csv Q1 Q2 Q3

  python -m sheetcalc.cli serve                               # Start web server
  python -m sheetcalc.cli serve --port 8080 --reload
"""
from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from sheetcalc.analytics.batch import run_batch
from sheetcalc.api.pages import format_file_size, format_number
from sheetcalc.data.classify import classify
from sheetcalc.data.loader import parse_table
from sheetcalc.data.schemas import Operation, Table
from sheetcalc.errors import SheetCalcError


def _load(path: Path) -> Table:
    content = path.read_bytes()
    table = parse_table(content, path.name)
    return table.with_numeric_columns(classify(table)).with_metadata(
        filename=path.name, size_bytes=len(content),
    )


def cmd_inspect(args) -> int:
    """Print headers with numeric markers."""
    table = _load(Path(args.file))

    print("\n" + "=" * 70)
    print(f"  {table.filename}  ({format_file_size(table.size_bytes)}, {table.row_count:,} rows)")
    print("=" * 70)
    for i, header in enumerate(table.headers):
        marker = "#" if i in table.numeric_columns else " "
        print(f"  [{marker}] {i:<4}{header}")

    if not table.numeric_columns:
        print("\n  No numeric columns found")
        return 1
    print(f"\n  {len(table.numeric_columns)} numeric column(s)\n")
    return 0


def cmd_calc(args) -> int:
    """Run one operation over the named columns."""
    table = _load(Path(args.file))
    columns = args.columns or table.numeric_headers
    batch = run_batch(table, columns, args.op)

    print(f"\n  {args.op.title()} — {table.filename}\n")
    for r in batch.results:
        print(f"   {r.column[:40]:<42}{format_number(r.value):>16}")
    for s in batch.skipped:
        print(f"   (skipped {s.column}: {s.reason})")
    print()

    if not batch.ok:
        print("  No valid calculations")
        return 1
    return 0


def cmd_serve(args) -> int:
    """Start the web server."""
    import uvicorn
    uvicorn.run("sheetcalc.main:app", host=args.host, port=args.port, reload=args.reload)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="sheetcalc", description="SheetCalc — spreadsheet column statistics")
    subparsers = parser.add_subparsers(dest="command")

    # inspect
    inspect_parser = subparsers.add_parser("inspect", help="Show headers and numeric columns")
    inspect_parser.add_argument("file", help="CSV, XLSX or XLS file")

    # calc
    calc_parser = subparsers.add_parser("calc", help="Compute a statistic over columns")
    calc_parser.add_argument("file", help="CSV, XLSX or XLS file")
    calc_parser.add_argument("columns", nargs="*", help="Column name(s) (default: all numeric)")
    calc_parser.add_argument("--op", required=True, choices=[op.value for op in Operation], help="Operation")

    # serve
    serve_parser = subparsers.add_parser("serve", help="Start web server")
    serve_parser.add_argument("--host", default="0.0.0.0", help="Bind address (default 0.0.0.0)")
    serve_parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8000")), help="Port (default 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")

    args = parser.parse_args(argv)
    commands = {"inspect": cmd_inspect, "calc": cmd_calc, "serve": cmd_serve}
    if args.command not in commands:
        parser.print_help()
        return 2

    try:
        return commands[args.command](args)
    except (SheetCalcError, OSError) as exc:
        print(f"  Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
