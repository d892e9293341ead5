from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel

from music_relay.domain.catalog.models import Album, Artist, Catalog, Track
from music_relay.domain.sync.mirror import MirrorSnapshot


class TrackInfo(BaseModel):
    id: str
    name: str
    url: str

    model_config = {"frozen": True}


class AlbumInfo(BaseModel):
    id: str
    name: str
    cover: str
    tracks: list[TrackInfo]


class ArtistInfo(BaseModel):
    id: str
    name: str
    albums: list[AlbumInfo]


class NodeSnapshot(BaseModel):
    address: str
    error: Optional[str] = None
    error_kind: Optional[str] = None  # e.g. TransportError, ProtocolViolation
    last_attempt_at: Optional[datetime] = None
    last_success_at: Optional[datetime] = None
    artists: list[ArtistInfo]


def _timestamp(value: Optional[float]) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc)


def track_info(track: Track) -> TrackInfo:
    return TrackInfo(id=track.id, name=track.name, url=track.locator)


def album_info(album: Album) -> AlbumInfo:
    return AlbumInfo(
        id=album.id,
        name=album.name,
        cover=album.cover,
        tracks=[track_info(t) for t in album.tracks.values()],
    )


def artist_info(artist: Artist) -> ArtistInfo:
    return ArtistInfo(
        id=artist.id,
        name=artist.name,
        albums=[album_info(a) for a in artist.albums.values()],
    )


def catalog_info(catalog: Catalog) -> list[ArtistInfo]:
    return [artist_info(a) for a in catalog.artists.values()]


def node_snapshot(snapshot: MirrorSnapshot) -> NodeSnapshot:
    """Convert a mirror snapshot to its JSON shape (no locks, no back-links)."""
    return NodeSnapshot(
        address=snapshot.address,
        error=snapshot.error_message,
        error_kind=snapshot.error_kind,
        last_attempt_at=_timestamp(snapshot.last_attempt_at),
        last_success_at=_timestamp(snapshot.last_success_at),
        artists=catalog_info(snapshot.catalog),
    )
