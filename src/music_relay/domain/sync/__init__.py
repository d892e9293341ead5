"""
Sync domain - keeps aggregator-side mirrors of remote node catalogs fresh.
"""

from .aggregator import Aggregator, RemoteNode
from .exceptions import TransportError
from .mirror import MirrorSnapshot, RemoteCatalogMirror
from .poller import Poller, fetch_listing, listing_url

__all__ = [
    "Aggregator",
    "MirrorSnapshot",
    "Poller",
    "RemoteCatalogMirror",
    "RemoteNode",
    "TransportError",
    "fetch_listing",
    "listing_url",
]
