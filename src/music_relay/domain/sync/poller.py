"""
Background poller that keeps one RemoteCatalogMirror fresh.

Each cycle fetches ``http://<address>/list``, decodes it into a new catalog
and swaps it into the mirror. Failures are recorded on the mirror and the
cycle is retried after the same fixed interval, forever. The fetch and
decode run outside the mirror lock so readers are only blocked for the swap.
"""

import threading
from typing import Callable, Optional

import requests
from loguru import logger

from music_relay.domain.catalog.exceptions import ProtocolViolation
from music_relay.domain.catalog.listing import decode_listing_bytes

from .exceptions import TransportError
from .mirror import RemoteCatalogMirror

FetchFunc = Callable[[str, Optional[float]], bytes]


def listing_url(address: str) -> str:
    """Build the listing URL for a ``host:port`` node address."""
    return f"http://{address}/list"


def fetch_listing(address: str, timeout: Optional[float] = None) -> bytes:
    """
    Fetch the raw listing body from a node.

    Args:
        address: Node address as ``host:port``
        timeout: Request timeout in seconds (None keeps the requests default)

    Returns:
        Response body bytes

    Raises:
        TransportError: On connection failure, body read failure or non-2xx status
    """
    try:
        response = requests.get(listing_url(address), timeout=timeout)
        try:
            response.raise_for_status()
            return response.content
        finally:
            response.close()
    except requests.RequestException as e:
        raise TransportError(address, str(e)) from e


class Poller:
    """Periodic fetch-decode-replace loop for a single mirror.

    Started once at startup and runs for the life of the process. ``stop``
    exists for tests and orderly shutdown; nothing else cancels a poller.
    """

    def __init__(
        self,
        mirror: RemoteCatalogMirror,
        interval_seconds: float,
        timeout: Optional[float] = None,
        fetch: FetchFunc = fetch_listing,
    ):
        if interval_seconds <= 0:
            raise ValueError("No refresh iteration set")
        self.mirror = mirror
        self.interval_seconds = interval_seconds
        self.timeout = timeout
        self._fetch = fetch
        self._stop_event = threading.Event()
        self.thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self.thread is not None and self.thread.is_alive()

    def run_cycle(self) -> bool:
        """Run one synchronization cycle.

        Returns:
            True if the mirror's catalog was replaced, False if an error was recorded
        """
        address = self.mirror.address
        try:
            body = self._fetch(address, self.timeout)
            catalog = decode_listing_bytes(body)
        except (TransportError, ProtocolViolation) as e:
            logger.warning(f"Sync of {address} failed: {e}")
            self.mirror.record_error(e)
            return False
        except Exception as e:
            logger.exception(f"Unexpected error while syncing {address}")
            self.mirror.record_error(e)
            return False

        self.mirror.replace(catalog)
        artists, albums, tracks = catalog.counts()
        logger.debug(f"Synced {address}: {artists} artists, {albums} albums, {tracks} tracks")
        return True

    def run_forever(self) -> None:
        """Cycle until ``stop`` is called; the interval wait is interruptible."""
        logger.info(f"Polling {listing_url(self.mirror.address)} every {self.interval_seconds}s")
        while not self._stop_event.is_set():
            self.run_cycle()
            self._stop_event.wait(self.interval_seconds)
        logger.info(f"Poller for {self.mirror.address} stopped")

    def start(self) -> None:
        """Start the loop in a background daemon thread."""
        if self.is_running:
            return

        self._stop_event.clear()
        self.thread = threading.Thread(
            target=self.run_forever,
            daemon=True,
            name=f"Poller-{self.mirror.address}",
        )
        self.thread.start()

    def stop(self, timeout: Optional[float] = 2.0) -> None:
        """Signal the loop to exit after its current cycle."""
        self._stop_event.set()
        if self.thread and self.thread.is_alive():
            self.thread.join(timeout=timeout)
