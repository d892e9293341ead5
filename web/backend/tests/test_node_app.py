"""Tests for the media node app."""

from fastapi.testclient import TestClient

from music_relay.core.config import NodeConfig
from music_relay.domain.catalog.listing import decode_listing
from music_relay.domain.catalog.loader import build_catalog
from web.backend.node_app import create_node_app


def test_health_endpoint(node_client: TestClient):
    """Test health check endpoint returns 200."""
    response = node_client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


class TestListing:
    """GET /list"""

    def test_listing_is_plain_text(self, node_client: TestClient):
        response = node_client.get("/list")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")

    def test_listing_uses_request_base_url(self, node_client: TestClient):
        response = node_client.get("/list")

        assert response.text == (
            "Alice\tA1\n"
            "\tAlbumX\tAL1\thttp://testserver/cover/A1/AL1\n"
            "\t\tSong1\tT1\thttp://testserver/track/A1/AL1/T1\n"
            "\t\tLost\tT2\thttp://testserver/track/A1/AL1/T2\n"
            "\tCoverless\tAL2\thttp://testserver/cover/A1/AL2\n"
        )

    def test_listing_uses_public_url(self, node_config: NodeConfig):
        node_config.public_url = "http://media.example:54321"
        client = TestClient(create_node_app(build_catalog(node_config.artists), node_config))

        catalog = decode_listing(client.get("/list").text)

        album = catalog.artists["A1"].albums["AL1"]
        assert album.cover == "http://media.example:54321/cover/A1/AL1"

    def test_listing_links_resolve(self, node_client: TestClient):
        """Every link in the listing points at a route of this node."""
        catalog = decode_listing(node_client.get("/list").text)

        track = catalog.artists["A1"].albums["AL1"].tracks["T1"]
        response = node_client.get(track.locator.replace("http://testserver", ""))
        assert response.status_code == 200


class TestCover:
    """GET /cover/{artistId}/{albumId}"""

    def test_known_album_returns_cover_bytes(self, node_client: TestClient):
        response = node_client.get("/cover/A1/AL1")

        assert response.status_code == 200
        assert response.content == b"\x89PNGfake-cover"
        assert response.headers["content-type"] == "image/png"

    def test_unknown_album_is_404(self, node_client: TestClient):
        response = node_client.get("/cover/A1/AL9")

        assert response.status_code == 404
        assert "Album not found" in response.text
        assert response.headers["content-type"].startswith("text/plain")

    def test_unknown_artist_is_404(self, node_client: TestClient):
        response = node_client.get("/cover/A9/AL1")

        assert response.status_code == 404
        assert "Artist not found" in response.text

    def test_unreadable_cover_is_403(self, node_client: TestClient):
        response = node_client.get("/cover/A1/AL2")

        assert response.status_code == 403
        assert response.text.startswith("ERROR: ")

    def test_malformed_paths_are_400(self, node_client: TestClient):
        for path in ("/cover", "/cover/", "/cover/A1", "/cover/A1/AL1/extra"):
            response = node_client.get(path)
            assert response.status_code == 400, path
            assert "Malformed cover request" in response.text


class TestTrack:
    """GET /track/{artistId}/{albumId}/{trackId}"""

    def test_known_track_is_audio_mpeg(self, node_client: TestClient):
        response = node_client.get("/track/A1/AL1/T1")

        assert response.status_code == 200
        assert response.content == b"ID3fake-track-1"
        assert response.headers["content-type"] == "audio/mpeg"

    def test_unknown_track_is_404(self, node_client: TestClient):
        response = node_client.get("/track/A1/AL1/T9")

        assert response.status_code == 404
        assert "Track not found" in response.text

    def test_unknown_album_is_404(self, node_client: TestClient):
        response = node_client.get("/track/A1/AL9/T1")

        assert response.status_code == 404
        assert "Album not found" in response.text

    def test_missing_file_is_403(self, node_client: TestClient):
        response = node_client.get("/track/A1/AL1/T2")

        assert response.status_code == 403

    def test_malformed_paths_are_400(self, node_client: TestClient):
        for path in ("/track", "/track/", "/track/A1", "/track/A1/AL1"):
            response = node_client.get(path)
            assert response.status_code == 400, path
            assert "Malformed track request" in response.text

    def test_percent_encoded_ids(self, media_dir):
        config = NodeConfig(
            artists=[
                {
                    "id": "the artist",
                    "name": "Spacey",
                    "albums": [
                        {
                            "id": "a?b",
                            "name": "Q",
                            "cover": str(media_dir / "cover.png"),
                            "tracks": [["Hash", "t#1", str(media_dir / "01.mp3")]],
                        }
                    ],
                }
            ]
        )
        client = TestClient(create_node_app(build_catalog(config.artists), config))

        response = client.get("/track/the%20artist/a%3Fb/t%231")

        assert response.status_code == 200
        assert response.content == b"ID3fake-track-1"
