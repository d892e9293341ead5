"""
Remote catalog mirror - the aggregator's cached copy of one node's catalog.

The stored Catalog is never mutated after it is handed to ``replace``; the
poller always builds a fresh tree. That lets ``snapshot`` return the stored
reference directly and keeps the critical section down to a pointer swap.
"""

import threading
import time
from dataclasses import dataclass
from typing import Optional

from music_relay.domain.catalog.models import Catalog


@dataclass(frozen=True)
class MirrorSnapshot:
    """Consistent view of a mirror at one instant."""

    address: str
    catalog: Catalog
    error: Optional[Exception]
    last_attempt_at: Optional[float]  # Unix timestamp of the latest cycle
    last_success_at: Optional[float]  # Unix timestamp of the latest successful cycle

    @property
    def error_message(self) -> Optional[str]:
        return str(self.error) if self.error is not None else None

    @property
    def error_kind(self) -> Optional[str]:
        return type(self.error).__name__ if self.error is not None else None


class RemoteCatalogMirror:
    """One remote node's catalog plus its last synchronization error.

    Writes come from this mirror's poller only; reads come from any number of
    request handlers. Every access goes through one lock.
    """

    def __init__(self, address: str):
        self.address = address
        self._lock = threading.Lock()
        self._catalog = Catalog()
        self._error: Optional[Exception] = None
        self._last_attempt_at: Optional[float] = None
        self._last_success_at: Optional[float] = None

    def replace(self, catalog: Catalog) -> None:
        """Swap in a freshly decoded catalog and clear the error."""
        now = time.time()
        with self._lock:
            self._catalog = catalog
            self._error = None
            self._last_attempt_at = now
            self._last_success_at = now

    def record_error(self, error: Exception) -> None:
        """Store a failed cycle's error; the catalog is left untouched."""
        now = time.time()
        with self._lock:
            self._error = error
            self._last_attempt_at = now

    def snapshot(self) -> MirrorSnapshot:
        with self._lock:
            return MirrorSnapshot(
                address=self.address,
                catalog=self._catalog,
                error=self._error,
                last_attempt_at=self._last_attempt_at,
                last_success_at=self._last_success_at,
            )
