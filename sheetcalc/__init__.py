"""SheetCalc — upload a spreadsheet, get column statistics back."""
from .config import APP_VERSION

__version__ = APP_VERSION
