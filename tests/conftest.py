"""Shared fixtures for core and domain tests."""

from pathlib import Path

import pytest

from music_relay.domain.catalog.models import Album, Artist, Catalog, Track


@pytest.fixture
def sample_catalog() -> Catalog:
    """Node-side catalog with one artist, one album and one track."""
    album = Album(id="AL1", name="AlbumX", cover="/music/alice/cover.jpg", artist_id="A1")
    album.add_track(Track(id="T1", name="Song1", locator="/music/alice/01.mp3", album_id="AL1"))
    artist = Artist(id="A1", name="Alice")
    artist.add_album(album)
    catalog = Catalog()
    catalog.add_artist(artist)
    return catalog


@pytest.fixture
def larger_catalog() -> Catalog:
    """Node-side catalog with several artists, an empty album and an empty artist."""
    catalog = Catalog()

    alice = Artist(id="A1", name="Alice")
    first = Album(id="AL1", name="AlbumX", cover="/m/a1/x.jpg", artist_id="A1")
    first.add_track(Track(id="T1", name="Song1", locator="/m/a1/1.mp3", album_id="AL1"))
    first.add_track(Track(id="T2", name="Song2", locator="/m/a1/2.mp3", album_id="AL1"))
    second = Album(id="AL2", name="Empty Album", cover="/m/a1/y.jpg", artist_id="A1")
    alice.add_album(first)
    alice.add_album(second)

    bob = Artist(id="B1", name="Bob & The Band")
    live = Album(id="AL1", name="Live", cover="/m/b1/live.png", artist_id="B1")
    live.add_track(Track(id="T1", name="Intro", locator="/m/b1/1.mp3", album_id="AL1"))
    bob.add_album(live)

    catalog.add_artist(alice)
    catalog.add_artist(bob)
    catalog.add_artist(Artist(id="C1", name="Carol"))
    return catalog


@pytest.fixture
def media_files(tmp_path: Path) -> dict:
    """Create a cover image and two track files on disk."""
    cover = tmp_path / "cover.jpg"
    cover.write_bytes(b"\xff\xd8fake-jpeg")
    track1 = tmp_path / "01.mp3"
    track1.write_bytes(b"ID3fake-audio-1")
    track2 = tmp_path / "02.mp3"
    track2.write_bytes(b"ID3fake-audio-2")
    return {"cover": cover, "track1": track1, "track2": track2}
