"""
SheetCalc — Configuration: upload limits, classification constants, session settings.
"""
import os

APP_VERSION = "1.0.0"

# ---------------------------------------------------------------------------
# Upload limits (env overrides for deployment)
# ---------------------------------------------------------------------------
MAX_UPLOAD_BYTES = int(os.environ.get("SHEETCALC_MAX_UPLOAD_BYTES", str(10 << 20)))  # 10 MiB
MAX_ROWS = int(os.environ.get("SHEETCALC_MAX_ROWS", "10000"))

# ---------------------------------------------------------------------------
# Accepted file extensions (compared case-insensitively after the last ".")
# ---------------------------------------------------------------------------
SUPPORTED_EXTENSIONS = {
    "csv": "csv",
    "xlsx": "workbook",
    "xls": "workbook",
}

# Decoding attempts for CSV uploads, first success wins
CSV_ENCODINGS = ["utf-8-sig", "cp1252", "latin-1"]

# ---------------------------------------------------------------------------
# Column classification
# ---------------------------------------------------------------------------
# Share of non-empty cells that must parse as numbers for a numeric column.
# Exactly 0.8 counts as numeric.
NUMERIC_THRESHOLD = 0.8

# Substituted for blank header cells, formatted with the 1-based column index
PLACEHOLDER_HEADER = "Column_{}"

# ---------------------------------------------------------------------------
# Table store / sessions
# ---------------------------------------------------------------------------
SESSION_COOKIE = "sheetcalc_session"
MAX_SESSIONS = int(os.environ.get("SHEETCALC_MAX_SESSIONS", "128"))

# Body rows rendered on the display page; statistics always use every row
PREVIEW_ROWS = int(os.environ.get("SHEETCALC_PREVIEW_ROWS", "1000"))

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL = os.environ.get("SHEETCALC_LOG_LEVEL", "INFO").upper()
