"""
Resolve node retrieval paths to local files.

Pure lookups over an immutable catalog plus one readability probe; the node
catalog is never mutated after startup so no locking is needed here.
"""

from pathlib import Path
from typing import List

from .exceptions import (
    AlbumNotFound,
    ArtistNotFound,
    LocalIOError,
    MalformedRequest,
    TrackNotFound,
)
from .models import Album, Catalog, Track


def split_resource_path(resource_path: str, expected_parts: int, kind: str) -> List[str]:
    """Split ``artist/album[/track]`` into its identifiers.

    Raises:
        MalformedRequest: If the number of non-empty segments is wrong
    """
    parts = resource_path.split("/") if resource_path else []
    if len(parts) != expected_parts or not all(parts):
        raise MalformedRequest(f"Malformed {kind} request")
    return parts


def find_album(catalog: Catalog, artist_id: str, album_id: str) -> Album:
    artist = catalog.artists.get(artist_id)
    if artist is None:
        raise ArtistNotFound()
    album = artist.albums.get(album_id)
    if album is None:
        raise AlbumNotFound()
    return album


def find_track(catalog: Catalog, artist_id: str, album_id: str, track_id: str) -> Track:
    album = find_album(catalog, artist_id, album_id)
    track = album.tracks.get(track_id)
    if track is None:
        raise TrackNotFound()
    return track


def ensure_readable(locator: str) -> Path:
    """Check the configured file can be opened for reading.

    Raises:
        LocalIOError: If opening the file fails
    """
    path = Path(locator).expanduser()
    try:
        with open(path, "rb"):
            pass
    except OSError as e:
        raise LocalIOError(str(path), e.strerror or str(e))
    return path


def resolve_cover(catalog: Catalog, resource_path: str) -> Path:
    """Map ``artistId/albumId`` to the album's readable cover file."""
    artist_id, album_id = split_resource_path(resource_path, 2, "cover")
    album = find_album(catalog, artist_id, album_id)
    return ensure_readable(album.cover)


def resolve_track(catalog: Catalog, resource_path: str) -> Path:
    """Map ``artistId/albumId/trackId`` to the track's readable file."""
    artist_id, album_id, track_id = split_resource_path(resource_path, 3, "track")
    track = find_track(catalog, artist_id, album_id, track_id)
    return ensure_readable(track.locator)
