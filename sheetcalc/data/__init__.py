"""Upload parsing, column classification, and the in-memory table store."""
from .schemas import Table, Operation, FileFormat, CalculationResult, BatchResult, SkippedColumn
from .loader import parse_table, sniff_format, derive_headers
from .classify import classify, is_numeric_column
from .ingest import ingest
from .store import TableStore
