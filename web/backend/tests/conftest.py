"""Pytest fixtures for backend tests.

Builds real node catalogs on disk and aggregators fed by scripted fetches,
so the apps under test never touch the network.
"""

from pathlib import Path
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from music_relay.core.config import AggregatorConfig, NodeConfig
from music_relay.domain.catalog.loader import build_catalog
from music_relay.domain.sync.aggregator import Aggregator
from music_relay.domain.sync.exceptions import TransportError
from web.backend.aggregator_app import create_aggregator_app
from web.backend.node_app import create_node_app

NODE_LISTINGS = {
    "node-a:54321": (
        b"Alice\tA1\n"
        b"\tAlbumX\tAL1\thttp://node-a:54321/cover/A1/AL1\n"
        b"\t\tSong1\tT1\thttp://node-a:54321/track/A1/AL1/T1\n"
    ),
}


@pytest.fixture
def media_dir(tmp_path: Path) -> Path:
    (tmp_path / "cover.png").write_bytes(b"\x89PNGfake-cover")
    (tmp_path / "01.mp3").write_bytes(b"ID3fake-track-1")
    return tmp_path


@pytest.fixture
def node_config(media_dir: Path) -> NodeConfig:
    return NodeConfig(
        artists=[
            {
                "id": "A1",
                "name": "Alice",
                "albums": [
                    {
                        "id": "AL1",
                        "name": "AlbumX",
                        "cover": str(media_dir / "cover.png"),
                        "tracks": [
                            ["Song1", "T1", str(media_dir / "01.mp3")],
                            ["Lost", "T2", str(media_dir / "missing.mp3")],
                        ],
                    },
                    {
                        "id": "AL2",
                        "name": "Coverless",
                        "cover": str(media_dir / "no-cover.jpg"),
                        "tracks": [],
                    },
                ],
            }
        ]
    )


@pytest.fixture
def node_client(node_config: NodeConfig) -> TestClient:
    app = create_node_app(build_catalog(node_config.artists), node_config)
    return TestClient(app)


def scripted_fetch(address: str, timeout: Optional[float]) -> bytes:
    if address not in NODE_LISTINGS:
        raise TransportError(address, "connection refused")
    return NODE_LISTINGS[address]


@pytest.fixture
def aggregator() -> Aggregator:
    config = AggregatorConfig(
        refresh_iteration_seconds=60,
        servers=["node-a:54321", "node-down:54321"],
    )
    return Aggregator.from_config(config, fetch=scripted_fetch)


@pytest.fixture
def synced_aggregator(aggregator: Aggregator) -> Aggregator:
    for node in aggregator.nodes:
        node.poller.run_cycle()
    return aggregator


@pytest.fixture
def aggregator_client(synced_aggregator: Aggregator) -> TestClient:
    app = create_aggregator_app(synced_aggregator, manage_pollers=False)
    return TestClient(app)
