"""
Catalog domain models.

Contains the Artist -> Album -> Track tree shared by the media node and the
aggregator. On the node a locator is a local file path; on the aggregator it
is the absolute URL taken from the remote listing.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, Tuple


@dataclass(frozen=True)
class Track:
    """Represents a single track.

    album_id is the non-owning link back to the containing album; the album
    owns the track through its ``tracks`` mapping.
    """

    id: str
    name: str
    locator: str  # File path on the node, URL on the aggregator
    album_id: str


@dataclass
class Album:
    """Represents an album and its tracks keyed by track id."""

    id: str
    name: str
    cover: str  # File path on the node, URL on the aggregator
    artist_id: str  # Non-owning link back to the owning artist
    tracks: Dict[str, Track] = field(default_factory=dict)

    def add_track(self, track: Track) -> None:
        """Add a track; a repeated id replaces the earlier track (last one wins)."""
        self.tracks[track.id] = track


@dataclass
class Artist:
    """Represents an artist and its albums keyed by album id."""

    id: str
    name: str
    albums: Dict[str, Album] = field(default_factory=dict)

    def add_album(self, album: Album) -> None:
        """Add an album; a repeated id replaces the earlier album (last one wins)."""
        self.albums[album.id] = album


@dataclass
class Catalog:
    """Root of the catalog tree.

    Iteration order is insertion order, which is what makes listing output
    stable from one request to the next.
    """

    artists: Dict[str, Artist] = field(default_factory=dict)

    def add_artist(self, artist: Artist) -> None:
        """Add an artist; a repeated id replaces the earlier artist (last one wins)."""
        self.artists[artist.id] = artist

    def iter_albums(self) -> Iterator[Tuple[Artist, Album]]:
        for artist in self.artists.values():
            for album in artist.albums.values():
                yield artist, album

    def iter_tracks(self) -> Iterator[Tuple[Artist, Album, Track]]:
        for artist, album in self.iter_albums():
            for track in album.tracks.values():
                yield artist, album, track

    def counts(self) -> Tuple[int, int, int]:
        """Return (artists, albums, tracks) totals."""
        albums = sum(len(a.albums) for a in self.artists.values())
        tracks = sum(1 for _ in self.iter_tracks())
        return len(self.artists), albums, tracks

    def is_empty(self) -> bool:
        return not self.artists
