"""
Catalog domain - the Artist -> Album -> Track tree and its listing codec.
"""

from .exceptions import (
    AlbumNotFound,
    ArtistNotFound,
    CatalogError,
    LocalIOError,
    MalformedRequest,
    NotFound,
    ProtocolViolation,
    TrackNotFound,
)
from .listing import cover_url, decode_listing, decode_listing_bytes, encode_listing, track_url
from .loader import build_catalog
from .lookup import resolve_cover, resolve_track
from .models import Album, Artist, Catalog, Track

__all__ = [
    "Album",
    "AlbumNotFound",
    "Artist",
    "ArtistNotFound",
    "Catalog",
    "CatalogError",
    "LocalIOError",
    "MalformedRequest",
    "NotFound",
    "ProtocolViolation",
    "Track",
    "TrackNotFound",
    "build_catalog",
    "cover_url",
    "decode_listing",
    "decode_listing_bytes",
    "encode_listing",
    "resolve_cover",
    "resolve_track",
    "track_url",
]
