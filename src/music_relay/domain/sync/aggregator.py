"""
Aggregator - owns one mirror and one poller per configured media node.

Built once at startup and handed to the web layer; there is no module-level
registry of nodes.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from loguru import logger

from music_relay.core.config import AggregatorConfig

from .mirror import MirrorSnapshot, RemoteCatalogMirror
from .poller import FetchFunc, Poller, fetch_listing


@dataclass(frozen=True)
class RemoteNode:
    """A configured media node with its mirror and the poller feeding it."""

    mirror: RemoteCatalogMirror
    poller: Poller

    @property
    def address(self) -> str:
        return self.mirror.address


class Aggregator:
    """Collection of remote nodes, in configuration order."""

    def __init__(self, nodes: List[RemoteNode]):
        self._nodes: Dict[str, RemoteNode] = {node.address: node for node in nodes}

    @classmethod
    def from_config(
        cls, config: AggregatorConfig, fetch: FetchFunc = fetch_listing
    ) -> "Aggregator":
        nodes = []
        for address in config.servers:
            mirror = RemoteCatalogMirror(address)
            poller = Poller(
                mirror,
                interval_seconds=config.refresh_iteration_seconds,
                timeout=config.request_timeout_seconds,
                fetch=fetch,
            )
            nodes.append(RemoteNode(mirror=mirror, poller=poller))
        return cls(nodes)

    @property
    def nodes(self) -> List[RemoteNode]:
        return list(self._nodes.values())

    def get(self, address: str) -> Optional[RemoteNode]:
        return self._nodes.get(address)

    def start(self) -> None:
        """Start every poller; each runs independently of the others."""
        logger.info(f"Starting {len(self._nodes)} pollers")
        for node in self._nodes.values():
            node.poller.start()

    def stop(self) -> None:
        for node in self._nodes.values():
            node.poller.stop()

    def snapshots(self) -> List[MirrorSnapshot]:
        """Snapshot each mirror; different nodes may reflect different cycles."""
        return [node.mirror.snapshot() for node in self._nodes.values()]
