"""Tests for the Aggregator."""

from typing import Optional

from music_relay.core.config import AggregatorConfig
from music_relay.domain.sync.aggregator import Aggregator
from music_relay.domain.sync.exceptions import TransportError

LISTINGS = {
    "node-a:1": b"Alice\tA1\n\tAlbumX\tAL1\tc\n",
    "node-b:1": b"Bob\tB1\n",
}


def fake_fetch(address: str, timeout: Optional[float]) -> bytes:
    if address not in LISTINGS:
        raise TransportError(address, "unreachable")
    return LISTINGS[address]


def make_config(servers) -> AggregatorConfig:
    return AggregatorConfig(
        refresh_iteration_seconds=30,
        servers=list(servers),
        request_timeout_seconds=4.0,
    )


class TestAggregator:
    def test_one_node_per_server_in_order(self) -> None:
        aggregator = Aggregator.from_config(make_config(["node-b:1", "node-a:1"]), fetch=fake_fetch)

        assert [node.address for node in aggregator.nodes] == ["node-b:1", "node-a:1"]
        node = aggregator.get("node-a:1")
        assert node.poller.mirror is node.mirror
        assert node.poller.interval_seconds == 30
        assert node.poller.timeout == 4.0

    def test_unknown_address(self) -> None:
        aggregator = Aggregator.from_config(make_config(["node-a:1"]), fetch=fake_fetch)
        assert aggregator.get("elsewhere:1") is None

    def test_nodes_sync_independently(self) -> None:
        aggregator = Aggregator.from_config(
            make_config(["node-a:1", "down:1", "node-b:1"]), fetch=fake_fetch
        )

        for node in aggregator.nodes:
            node.poller.run_cycle()
        snapshots = {s.address: s for s in aggregator.snapshots()}

        assert list(snapshots["node-a:1"].catalog.artists) == ["A1"]
        assert list(snapshots["node-b:1"].catalog.artists) == ["B1"]
        assert snapshots["down:1"].catalog.is_empty()
        assert snapshots["down:1"].error_kind == "TransportError"

    def test_no_servers(self) -> None:
        aggregator = Aggregator.from_config(make_config([]), fetch=fake_fetch)

        aggregator.start()
        aggregator.stop()

        assert aggregator.snapshots() == []

    def test_start_and_stop_all_pollers(self) -> None:
        aggregator = Aggregator.from_config(make_config(["node-a:1", "node-b:1"]), fetch=fake_fetch)

        aggregator.start()
        try:
            assert all(node.poller.is_running for node in aggregator.nodes)
        finally:
            aggregator.stop()

        assert not any(node.poller.is_running for node in aggregator.nodes)
