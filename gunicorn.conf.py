"""Gunicorn config for SheetCalc."""
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Uploaded tables live in process memory, keyed by session cookie.
# More than one worker would split a session's upload and its calculations
# across processes, so scale with threads instead. Sync routes and upload
# parsing run in Starlette's threadpool; the table store is lock-protected.
worker_class = "uvicorn.workers.UvicornWorker"
workers = 1

# Parsing a 10 MB workbook can take a few seconds
timeout = 60

# Graceful timeout for shutdown
graceful_timeout = 30

keepalive = 5

# Logging
accesslog = "-"
errorlog = "-"
loglevel = os.environ.get("SHEETCALC_LOG_LEVEL", "info").lower()
