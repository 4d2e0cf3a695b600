"""
Write-coalescing save queue.

Bursts of "replace the whole collection" requests (e.g. UI auto-save) are
collapsed into one write of the most recent payload. Every caller whose
payload was superseded still gets a settled Future carrying the result (or
the exception) of the write that replaced it.

Latest write wins: older payloads in a burst are never written on their own.
That is only correct because every payload is a full-state snapshot.
"""

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

P = TypeVar("P")

logger = logging.getLogger(__name__)


def _spawn_daemon(target: Callable[[], None]) -> None:
    threading.Thread(target=target, name="save-coalescer", daemon=True).start()


@dataclass
class _PendingSave(Generic[P]):
    payload: P
    future: Future


class SaveCoalescer(Generic[P]):
    """
    Serialized write queue with latest-payload-wins coalescing.

    At most one call to the write function is in flight at any time.
    """

    def __init__(
        self,
        write: Callable[[P], Any],
        spawn: Callable[[Callable[[], None]], None] | None = None,
    ):
        """
        Initialize the coalescer.

        Args:
            write: Performs one underlying write; its return value (or raised
                   exception) settles every future of the drain cycle
            spawn: Starts the drain loop off the caller's thread. Defaults to
                   a daemon thread.
        """
        self._write = write
        self._spawn = spawn or _spawn_daemon
        self._lock = threading.Lock()
        self._pending: list[_PendingSave[P]] = []
        self._draining = False

    @property
    def is_draining(self) -> bool:
        with self._lock:
            return self._draining

    @property
    def pending_count(self) -> int:
        with self._lock:
            return len(self._pending)

    def enqueue(self, payload: P) -> Future:
        """
        Queue a payload for writing.

        Returns:
            Future resolved with the result of the write that covers this
            payload, or failed with its exception
        """
        future: Future = Future()
        with self._lock:
            self._pending.append(_PendingSave(payload, future))
            start = not self._draining
            if start:
                self._draining = True

        if start:
            try:
                self._spawn(self._drain)
            except RuntimeError as e:
                # Could not start a drain thread; fail everything queued so far
                with self._lock:
                    failed, self._pending = self._pending, []
                    self._draining = False
                for entry in failed:
                    entry.future.set_exception(e)
        return future

    def _drain(self) -> None:
        while True:
            with self._lock:
                if not self._pending:
                    self._draining = False
                    return
                latest = self._pending.pop()
                superseded = [entry.future for entry in self._pending]
                self._pending = []

            logger.debug(f"Writing latest payload, {len(superseded)} superseded")
            try:
                result = self._write(latest.payload)
            except Exception as e:
                logger.error(f"Coalesced write failed for {len(superseded) + 1} callers: {e}")
                for future in [latest.future, *superseded]:
                    future.set_exception(e)
            else:
                for future in [latest.future, *superseded]:
                    future.set_result(result)
