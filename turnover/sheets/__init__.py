"""
Google Sheets sync layer.

Provides:
- SheetsClient: rate-limited, cached, write-coalescing client
- TabularStore / GoogleSheetsStore: range-addressed transport
- MinIntervalRateLimiter: pacing gate for API calls
- SaveCoalescer: latest-payload-wins write queue
- Row, encode_company, decode_row, decode_rows: fixed-layout row codec
"""

from .client import SheetsClient
from .coalescer import SaveCoalescer
from .rate_limiter import MinIntervalRateLimiter
from .row_codec import Row, decode_row, decode_rows, encode_company
from .transport import GoogleSheetsStore, TabularStore

__all__ = [
    "SheetsClient",
    "SaveCoalescer",
    "MinIntervalRateLimiter",
    "Row",
    "decode_row",
    "decode_rows",
    "encode_company",
    "GoogleSheetsStore",
    "TabularStore",
]
