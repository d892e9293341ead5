"""Core infrastructure layer - no business logic dependencies.

This module provides foundation-level services:
- Configuration management (JSON)
- Logging setup (Loguru)
"""

from .config import (
    AggregatorConfig,
    ConfigError,
    LoggingConfig,
    NodeConfig,
    ServerConfig,
    get_config_path,
    load_aggregator_config,
    load_node_config,
    parse_aggregator_config,
    parse_node_config,
)
from .output import setup_loguru

__all__ = [
    "AggregatorConfig",
    "ConfigError",
    "LoggingConfig",
    "NodeConfig",
    "ServerConfig",
    "get_config_path",
    "load_aggregator_config",
    "load_node_config",
    "parse_aggregator_config",
    "parse_node_config",
    "setup_loguru",
]
