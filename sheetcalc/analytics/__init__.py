"""Column statistics over stored tables."""
from .common import parse_number
from .aggregates import compute, extract_values, resolve_column
from .batch import run_batch
