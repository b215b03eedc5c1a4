"""
HTML pages for the upload → display → results flow, plus display formatting.
"""
from __future__ import annotations

import datetime as dt
from html import escape
from typing import Optional

from sheetcalc.config import MAX_UPLOAD_BYTES, PREVIEW_ROWS
from sheetcalc.data.schemas import BatchResult, Operation, Table


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

def format_file_size(size: int) -> str:
    """Binary-unit size: "512 B", "1.5 KB", "10.0 MB"."""
    unit = 1024
    if size < unit:
        return f"{size} B"
    div, exp = unit, 0
    n = size // unit
    while n >= unit:
        div *= unit
        exp += 1
        n //= unit
    return f"{size / div:.1f} {'KMGTPE'[exp]}B"


def format_number(value: float) -> str:
    return f"{value:.2f}"


def format_timestamp(ts: dt.datetime) -> str:
    """E.g. "January 2, 2006 at 3:04 PM"."""
    hour = ts.hour % 12 or 12
    return f"{ts:%B} {ts.day}, {ts.year} at {hour}:{ts:%M} {ts:%p}"


def operation_label(operation: str) -> str:
    try:
        return Operation(operation).label
    except ValueError:
        return operation.title()


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------

def _page(title: str, body: str) -> str:
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n<head>\n<meta charset="utf-8">\n'
        f"<title>{escape(title)} · SheetCalc</title>\n"
        '<link rel="stylesheet" href="/static/style.css">\n'
        "</head>\n<body>\n<main>\n"
        f"{body}\n"
        "</main>\n</body>\n</html>\n"
    )


def upload_page(error: Optional[str] = None) -> str:
    notice = f'<p class="error">{escape(error)}</p>' if error else ""
    body = f"""<h1>SheetCalc</h1>
<p>Upload a CSV or Excel file (up to {format_file_size(MAX_UPLOAD_BYTES)}) to compute column statistics.</p>
{notice}
<form action="/display" method="post" enctype="multipart/form-data">
  <input type="file" name="file" accept=".csv,.xlsx,.xls" required>
  <button type="submit">Upload</button>
</form>"""
    return _page("Upload", body)


def _table_html(table: Table) -> str:
    numeric = table.numeric_columns
    width = len(table.headers)

    head = "".join(
        f'<th class="numeric">{escape(h)}</th>' if i in numeric else f"<th>{escape(h)}</th>"
        for i, h in enumerate(table.headers)
    )
    lines = []
    for row in table.rows[:PREVIEW_ROWS]:
        cells = list(row) + [""] * (width - len(row))
        tds = "".join(
            f'<td class="numeric">{escape(c)}</td>' if i in numeric else f"<td>{escape(c)}</td>"
            for i, c in enumerate(cells)
        )
        lines.append(f"<tr>{tds}</tr>")

    note = ""
    if table.row_count > PREVIEW_ROWS:
        note = f'<p class="note">Showing first {PREVIEW_ROWS:,} of {table.row_count:,} rows.</p>'
    return f"<table>\n<thead><tr>{head}</tr></thead>\n<tbody>\n" + "\n".join(lines) + f"\n</tbody>\n</table>\n{note}"


def display_page(table: Table) -> str:
    checkboxes = "\n".join(
        f'  <label><input type="checkbox" name="cols" value="{escape(table.headers[i])}" checked> '
        f"{escape(table.headers[i])}</label>"
        for i in table.numeric_indices
    )
    options = "\n".join(
        f'    <option value="{op.value}">{op.label}</option>' for op in Operation
    )
    body = f"""<h1>{escape(table.filename or 'Upload')}</h1>
<p class="meta">{format_file_size(table.size_bytes)} · {table.row_count:,} rows · {len(table.numeric_columns)} numeric columns</p>
<form action="/calculate" method="post">
<fieldset>
  <legend>Columns</legend>
{checkboxes}
</fieldset>
  <select name="operation">
{options}
  </select>
  <button type="submit">Calculate</button>
</form>
{_table_html(table)}
<p><a href="/">Upload another file</a></p>"""
    return _page(table.filename or "Data", body)


def results_page(batch: BatchResult, table: Table, timestamp: dt.datetime) -> str:
    rows = "\n".join(
        f"<tr><td>{escape(r.column)}</td><td class=\"numeric\">{format_number(r.value)}</td></tr>"
        for r in batch.results
    )
    label = operation_label(batch.operation)
    body = f"""<h1>{escape(label)}</h1>
<p class="meta">{escape(table.filename or '')} · {format_timestamp(timestamp)}</p>
<table>
<thead><tr><th>Column</th><th>{escape(label)}</th></tr></thead>
<tbody>
{rows}
</tbody>
</table>
<p><a href="/">Upload another file</a></p>"""
    return _page(f"{label} results", body)
