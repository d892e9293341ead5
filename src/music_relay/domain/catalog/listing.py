"""
Listing codec - the line-oriented text form of a catalog.

One record per line, fields separated by TAB, hierarchy given by the number
of leading empty fields:

    Artist:  name<TAB>id
    Album:   <TAB>name<TAB>id<TAB>coverURL
    Track:   <TAB><TAB>name<TAB>id<TAB>trackURL

The node encodes its local catalog with absolute URLs pointing back at
itself; the aggregator decodes the text into a fresh Catalog whose locators
are those URLs. Decoding never merges into an existing tree.
"""

from typing import List, Optional
from urllib.parse import quote

from .exceptions import ProtocolViolation
from .models import Album, Artist, Catalog, Track

FIELD_SEPARATOR = "\t"
RECORD_SEPARATOR = "\n"

ARTIST_FIELDS = 2
ALBUM_FIELDS = 4
TRACK_FIELDS = 5

_FORBIDDEN = ("\t", "\r", "\n")


def _quote_id(identifier: str) -> str:
    return quote(identifier, safe="")


def cover_url(base_url: str, artist_id: str, album_id: str) -> str:
    """Build the absolute URL of an album cover on a node."""
    return f"{base_url.rstrip('/')}/cover/{_quote_id(artist_id)}/{_quote_id(album_id)}"


def track_url(base_url: str, artist_id: str, album_id: str, track_id: str) -> str:
    """Build the absolute URL of a track on a node."""
    return (
        f"{base_url.rstrip('/')}/track/"
        f"{_quote_id(artist_id)}/{_quote_id(album_id)}/{_quote_id(track_id)}"
    )


def _clean_name(name: str) -> str:
    for char in _FORBIDDEN:
        name = name.replace(char, " ")
    return name


def _checked_id(identifier: str) -> str:
    if any(char in identifier for char in _FORBIDDEN):
        raise ValueError(f"Identifier {identifier!r} cannot be encoded in a listing")
    return identifier


def encode_listing(catalog: Catalog, base_url: str) -> str:
    """Serialize a catalog to listing text.

    Args:
        catalog: Tree to encode (node side, locators are file paths)
        base_url: Scheme and host the URLs in the listing should point at

    Returns:
        Listing text, one newline-terminated record per entity

    Raises:
        ValueError: If an identifier contains a field or record separator, or
            an artist has an empty name
    """
    lines: List[str] = []

    for artist in catalog.artists.values():
        # An empty first field would turn the artist record into an album/track shape
        if not artist.name:
            raise ValueError(f"Artist {artist.id!r} has no name and cannot be encoded")
        lines.append(
            FIELD_SEPARATOR.join([_clean_name(artist.name), _checked_id(artist.id)])
        )
        for album in artist.albums.values():
            lines.append(
                FIELD_SEPARATOR.join([
                    "",
                    _clean_name(album.name),
                    _checked_id(album.id),
                    cover_url(base_url, artist.id, album.id),
                ])
            )
            for track in album.tracks.values():
                lines.append(
                    FIELD_SEPARATOR.join([
                        "",
                        "",
                        _clean_name(track.name),
                        _checked_id(track.id),
                        track_url(base_url, artist.id, album.id, track.id),
                    ])
                )

    return "".join(line + RECORD_SEPARATOR for line in lines)


def decode_listing(text: str) -> Catalog:
    """Parse listing text into a new catalog.

    Any line whose first field is non-empty starts a new artist; one with no
    id field is skipped and leaves no current artist, so records that follow
    it are not attached to the previous one. Other lines of unknown shape are
    skipped. Repeated identifiers at the same level replace the earlier entity
    (last one wins). A new artist record closes the previous artist's current
    album.

    Args:
        text: Listing text as served by a node

    Returns:
        A freshly built Catalog

    Raises:
        ProtocolViolation: If an album appears before any artist, or a track
            before any album of the current artist
    """
    catalog = Catalog()
    current_artist: Optional[Artist] = None
    current_album: Optional[Album] = None

    for line_number, line in enumerate(text.split(RECORD_SEPARATOR), start=1):
        if line.endswith("\r"):
            line = line[:-1]
        fields = line.split(FIELD_SEPARATOR)

        if fields[0]:
            # Extra trailing fields are tolerated; a bare name has no id
            if len(fields) < ARTIST_FIELDS:
                current_artist = None
                current_album = None
                continue
            current_artist = Artist(id=fields[1], name=fields[0])
            current_album = None
            catalog.add_artist(current_artist)

        elif len(fields) == ALBUM_FIELDS:
            if current_artist is None:
                raise ProtocolViolation(
                    "Album definition before any artist definition", line_number
                )
            _, name, album_id, cover = fields
            current_album = Album(
                id=album_id, name=name, cover=cover, artist_id=current_artist.id
            )
            current_artist.add_album(current_album)

        elif len(fields) == TRACK_FIELDS:
            if current_album is None:
                raise ProtocolViolation(
                    "Track definition before any album definition", line_number
                )
            _, _, name, track_id, url = fields
            current_album.add_track(
                Track(id=track_id, name=name, locator=url, album_id=current_album.id)
            )

    return catalog


def decode_listing_bytes(body: bytes) -> Catalog:
    """Decode a raw HTTP body (UTF-8) into a catalog.

    Raises:
        ProtocolViolation: If the body is not UTF-8 or the listing is invalid
    """
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ProtocolViolation(f"Listing is not valid UTF-8: {e.reason}")
    return decode_listing(text)
