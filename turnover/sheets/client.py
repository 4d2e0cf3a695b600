"""
Rate-limited, cached, write-coalescing client for the company sheet.

Public operations:
- initialize(credentials, spreadsheet_id) -> bool
- list_companies() -> list[Company]
- replace_all(companies) -> bool
- clear_all() -> bool

Every transport call passes through the client's one rate limiter. Writes
are serialized by the save coalescer, and every successful write empties the
read cache. Falling back to local storage on failure is the caller's call.
"""

import logging
from collections.abc import Callable

from turnover.cache import ReadCache
from turnover.config import SyncSettings
from turnover.errors import ConfigurationMissing, QueueFailure, TrackerError
from turnover.models import Company
from turnover.sheets import layout
from turnover.sheets.coalescer import SaveCoalescer
from turnover.sheets.rate_limiter import MinIntervalRateLimiter
from turnover.sheets.row_codec import decode_rows, encode_company
from turnover.sheets.transport import GoogleSheetsStore, TabularStore

logger = logging.getLogger(__name__)

StoreFactory = Callable[[dict, str], TabularStore]


class SheetsClient:
    """Sync client for one spreadsheet."""

    def __init__(
        self,
        settings: SyncSettings | None = None,
        rate_limiter: MinIntervalRateLimiter | None = None,
        cache: ReadCache | None = None,
        store_factory: StoreFactory = GoogleSheetsStore.from_service_account_info,
        coalescer_spawn: Callable | None = None,
    ):
        """
        Initialize the client. Nothing is contacted until initialize().

        Args:
            settings: Pacing, TTL and row-range settings. Defaults to SyncSettings().
            rate_limiter: Pacing gate; one per client, built from settings if None
            cache: Read cache, built from settings if None
            store_factory: Builds the transport from (credentials, spreadsheet_id)
            coalescer_spawn: Overrides how the save drain loop is started
        """
        self.settings = settings or SyncSettings()
        self.rate_limiter = rate_limiter or MinIntervalRateLimiter(self.settings.min_request_interval)
        self.cache = cache or ReadCache(self.settings.cache_ttl)
        self._store_factory = store_factory
        self._store: TabularStore | None = None
        self._coalescer: SaveCoalescer[list[Company]] = SaveCoalescer(self._write_all, spawn=coalescer_spawn)
        self._data_range = layout.data_range(self.settings.max_rows)

    @property
    def is_ready(self) -> bool:
        return self._store is not None

    def _require_store(self) -> TabularStore:
        if self._store is None:
            raise ConfigurationMissing("Sheets client is not initialized")
        return self._store

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    def initialize(self, credentials: dict | None, spreadsheet_id: str | None) -> bool:
        """
        Connect to the spreadsheet and make sure the header row exists.

        Returns:
            True when the store is reachable and has a header; False when
            credentials or the spreadsheet id are missing, or the store
            cannot be reached. The cause is logged, never raised.
        """
        if not credentials or not spreadsheet_id:
            logger.warning("Sheets not configured: credentials and spreadsheet id are required")
            return False

        try:
            store = self._store_factory(credentials, spreadsheet_id)
            self.rate_limiter.acquire()
            store.describe_store()
            self._ensure_header(store)
        except TrackerError as e:
            logger.error(f"Failed to initialize Google Sheets: {e}")
            return False

        self._store = store
        self.cache.invalidate()
        logger.info(f"Connected to spreadsheet {spreadsheet_id}")
        return True

    def _ensure_header(self, store: TabularStore) -> None:
        self.rate_limiter.acquire()
        existing = store.read_range(layout.HEADER_CHECK_RANGE)
        if existing and any(existing[0]):
            return
        self.rate_limiter.acquire()
        store.write_range(layout.HEADER_RANGE, [layout.header_row()])
        logger.info("Sheet headers initialized")

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_companies(self) -> list[Company]:
        """
        All companies in the sheet, served from cache while it is fresh.

        Raises:
            ConfigurationMissing: initialize() has not succeeded
            TransportUnavailable: the read failed
        """
        cached = self.cache.get()
        if cached is not None:
            logger.debug("Returning cached companies")
            return cached

        store = self._require_store()
        # A save finishing during the read invalidates the cache; its rows are stale then
        generation = self.cache.generation
        self.rate_limiter.acquire()
        rows = store.read_range(self._data_range)
        companies = decode_rows(rows)
        self.cache.put(companies, generation)
        return companies

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def replace_all(self, companies: list[Company]) -> bool:
        """
        Replace the whole collection, coalescing with concurrent saves.

        Blocks until the write covering this payload settles. If a later
        save arrives before this one is written, only the later payload is
        written and both callers get its result.

        Raises:
            ConfigurationMissing: initialize() has not succeeded
            QueueFailure: the coalesced write failed
        """
        self._require_store()
        future = self._coalescer.enqueue(list(companies))
        return future.result()

    def _write_all(self, companies: list[Company]) -> bool:
        store = self._require_store()
        try:
            self.rate_limiter.acquire()
            store.clear_range(self._data_range)

            if companies:
                rows = [encode_company(c).to_list() for c in companies]
                self.rate_limiter.acquire()
                store.write_range(layout.write_range(len(rows)), rows)
        except TrackerError as e:
            raise QueueFailure(f"Saving {len(companies)} companies failed: {e}") from e

        self.cache.invalidate()
        logger.info(f"Saved {len(companies)} companies to sheet")
        return True

    def clear_all(self) -> bool:
        """
        Blank every column of the sheet, header included.

        Raises:
            ConfigurationMissing: initialize() has not succeeded
            TransportUnavailable: the clear failed
        """
        store = self._require_store()
        self.rate_limiter.acquire()
        store.clear_range(layout.CLEAR_ALL_RANGE)
        logger.info("All data cleared from spreadsheet")
        return True
