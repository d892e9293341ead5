from fastapi import Request

from music_relay.core.config import NodeConfig
from music_relay.domain.catalog.models import Catalog
from music_relay.domain.sync.aggregator import Aggregator


def get_catalog(request: Request) -> Catalog:
    """FastAPI dependency for the node's immutable catalog."""
    return request.app.state.catalog


def get_node_config(request: Request) -> NodeConfig:
    """FastAPI dependency for the node configuration."""
    return request.app.state.config


def get_aggregator(request: Request) -> Aggregator:
    """FastAPI dependency for the aggregator owning all mirrors."""
    return request.app.state.aggregator
