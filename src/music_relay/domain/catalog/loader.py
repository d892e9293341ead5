"""
Build the media node's catalog from configuration entries.

Each level is validated separately so a malformed track only drops that
track, a malformed album only that album, and so on. Skipped entries are
logged with their position and the validation message.
"""

from typing import Any, List

from loguru import logger
from pydantic import BaseModel, ValidationError, field_validator, model_validator

from .models import Album, Artist, Catalog, Track

_FORBIDDEN = ("\t", "\r", "\n")


def _check_identifier(value: str) -> str:
    if not value:
        raise ValueError("identifier is empty")
    if "/" in value:
        raise ValueError("identifier must not contain '/'")
    if any(char in value for char in _FORBIDDEN):
        raise ValueError("identifier must not contain tabs or line breaks")
    return value


def _check_name(value: str) -> str:
    if not value:
        raise ValueError("name is empty")
    if any(char in value for char in _FORBIDDEN):
        raise ValueError("name must not contain tabs or line breaks")
    return value


def _describe(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "entry"
    return f"{location}: {first['msg']}"


class TrackEntry(BaseModel):
    """A track entry; accepts ``{"name", "id", "file"}`` or ``[name, id, file]``."""

    id: str
    name: str
    file: str

    @model_validator(mode="before")
    @classmethod
    def _from_array(cls, data: Any) -> Any:
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise ValueError("track array must be [name, id, file]")
            name, track_id, file = data
            return {"name": name, "id": track_id, "file": file}
        return data

    @field_validator("id")
    @classmethod
    def _id(cls, value: str) -> str:
        return _check_identifier(value)

    @field_validator("name")
    @classmethod
    def _name(cls, value: str) -> str:
        return _check_name(value)

    @field_validator("file")
    @classmethod
    def _file(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("file path is empty")
        return value


class AlbumEntry(BaseModel):
    id: str
    name: str
    cover: str
    tracks: List[Any] = []

    @field_validator("id")
    @classmethod
    def _id(cls, value: str) -> str:
        return _check_identifier(value)

    @field_validator("name")
    @classmethod
    def _name(cls, value: str) -> str:
        return _check_name(value)


class ArtistEntry(BaseModel):
    id: str
    name: str
    albums: List[Any] = []

    @field_validator("id")
    @classmethod
    def _id(cls, value: str) -> str:
        return _check_identifier(value)

    @field_validator("name")
    @classmethod
    def _name(cls, value: str) -> str:
        return _check_name(value)


def _build_album(artist_id: str, entry: AlbumEntry, where: str) -> Album:
    album = Album(id=entry.id, name=entry.name, cover=entry.cover, artist_id=artist_id)

    for track_number, raw_track in enumerate(entry.tracks):
        try:
            track_entry = TrackEntry.model_validate(raw_track)
        except ValidationError as e:
            logger.warning(
                f"Error parsing {where} track #{track_number}, skipping: {_describe(e)}"
            )
            continue

        if track_entry.id in album.tracks:
            logger.warning(f"Duplicate track id {track_entry.id!r} in {where}, keeping the last")
        album.add_track(
            Track(
                id=track_entry.id,
                name=track_entry.name,
                locator=track_entry.file,
                album_id=album.id,
            )
        )

    return album


def build_catalog(artist_entries: List[Any]) -> Catalog:
    """Build a catalog from the ``artists`` list of the node configuration.

    Args:
        artist_entries: Raw JSON artist entries

    Returns:
        Catalog containing every entity that validated
    """
    catalog = Catalog()

    for artist_number, raw_artist in enumerate(artist_entries):
        try:
            artist_entry = ArtistEntry.model_validate(raw_artist)
        except ValidationError as e:
            logger.warning(f"Error parsing artist #{artist_number}, skipping: {_describe(e)}")
            continue

        artist = Artist(id=artist_entry.id, name=artist_entry.name)

        for album_number, raw_album in enumerate(artist_entry.albums):
            where = f"artist {artist.id!r} album #{album_number}"
            try:
                album_entry = AlbumEntry.model_validate(raw_album)
            except ValidationError as e:
                logger.warning(f"Error parsing {where}, skipping: {_describe(e)}")
                continue

            if album_entry.id in artist.albums:
                logger.warning(
                    f"Duplicate album id {album_entry.id!r} for artist {artist.id!r}, keeping the last"
                )
            artist.add_album(_build_album(artist.id, album_entry, f"album {album_entry.id!r}"))

        if artist.id in catalog.artists:
            logger.warning(f"Duplicate artist id {artist.id!r}, keeping the last")
        catalog.add_artist(artist)
        logger.info(f"Loaded artist: {artist.name} ({len(artist.albums)} albums)")

    artists, albums, tracks = catalog.counts()
    logger.info(f"Catalog loaded: {artists} artists, {albums} albums, {tracks} tracks")
    return catalog
