"""
Minimum-interval pacing gate for Sheets API calls.

Features:
- Blocks each caller until min_interval has passed since the previous
  permitted request started
- Callers are served in arrival order (ticket queue)
- Paces requests only; it does not cap how many are in flight
- Injectable clock and sleep for deterministic tests
"""

import logging
import threading
import time
from collections.abc import Callable

logger = logging.getLogger(__name__)

# Default spacing between request starts (seconds)
DEFAULT_MIN_INTERVAL = 2.0


class MinIntervalRateLimiter:
    """
    Thread-safe FIFO pacing gate.

    One instance must front every call to a given store so the shared
    last-request stamp sees all of them.
    """

    def __init__(
        self,
        min_interval: float = DEFAULT_MIN_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize the limiter.

        Args:
            min_interval: Seconds required between request starts
            clock: Monotonic time source
            sleep: Blocking sleep used to wait out the interval
        """
        if min_interval < 0:
            raise ValueError(f"min_interval must be >= 0, got {min_interval}")
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._cond = threading.Condition()
        self._next_ticket = 0
        self._serving = 0
        self._last_request_at: float | None = None

    @property
    def last_request_at(self) -> float | None:
        """Clock reading at the start of the last permitted request."""
        return self._last_request_at

    def acquire(self) -> None:
        """Block until the caller may start its request, then stamp it."""
        with self._cond:
            ticket = self._next_ticket
            self._next_ticket += 1
            self._cond.wait_for(lambda: self._serving == ticket)

        # Only the ticket holder reaches this point, so the stamp is not contended
        try:
            if self._last_request_at is not None:
                wait = self.min_interval - (self._clock() - self._last_request_at)
                if wait > 0:
                    logger.debug(f"Rate limit: waiting {wait:.2f}s")
                    self._sleep(wait)
            self._last_request_at = self._clock()
        finally:
            with self._cond:
                self._serving += 1
                self._cond.notify_all()
