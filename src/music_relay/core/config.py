"""
Configuration management for Music Relay

Both roles read a JSON document. The media node needs the artist/album/track
tree it serves; the aggregator needs the refresh interval and the addresses
of the nodes it polls. The artist tree itself is validated by
``music_relay.domain.catalog.loader``; this module only checks that the
required keys exist and have the right shape.
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

from loguru import logger
from pydantic import BaseModel, ValidationError, field_validator

DEFAULT_NODE_PORT = 54321
DEFAULT_AGGREGATOR_PORT = 54320

# Names both loguru and uvicorn accept
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(Exception):
    """Raised when the configuration file is missing, unparseable or incomplete."""

    pass


@dataclass
class ServerConfig:
    """Address the HTTP server listens on."""

    host: str = "0.0.0.0"
    port: int = DEFAULT_NODE_PORT


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = None  # No file sink unless set
    console_output: bool = True
    rotation: str = "10 MB"
    retention: int = 5  # Number of rotated files to keep


@dataclass
class NodeConfig:
    """Configuration for a media node."""

    listen: ServerConfig = field(default_factory=ServerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    # Base for cover/track URLs in the listing; the request's base URL when unset
    public_url: Optional[str] = None
    # Raw artist entries, validated when the catalog is built
    artists: List[Any] = field(default_factory=list)


@dataclass
class AggregatorConfig:
    """Configuration for an aggregator."""

    refresh_iteration_seconds: int
    servers: List[str]
    listen: ServerConfig = field(
        default_factory=lambda: ServerConfig(port=DEFAULT_AGGREGATOR_PORT)
    )
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    request_timeout_seconds: Optional[float] = None  # None keeps the transport default


class ServerAddress(BaseModel):
    """A single ``host:port`` entry of the aggregator's server list."""

    address: str

    @field_validator("address")
    @classmethod
    def _check_address(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("address is empty")
        if "/" in value or any(c.isspace() for c in value):
            raise ValueError("address must be host[:port] without a path")
        return value


def get_config_path(explicit: Optional[str] = None) -> Path:
    """Get the configuration file path.

    Checks in the following order:
    1. Explicit path (``--config``)
    2. MUSIC_RELAY_CONFIG environment variable
    3. config.json in the current working directory
    """
    if explicit:
        return Path(explicit).expanduser()

    env_path = os.environ.get("MUSIC_RELAY_CONFIG")
    if env_path:
        return Path(env_path).expanduser()

    return Path.cwd() / "config.json"


def load_dotenv_file() -> None:
    """Load a .env file from the working directory if present."""
    from dotenv import load_dotenv

    env_path = Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(env_path)


def read_config_document(config_path: Path) -> dict:
    """Read and parse the JSON document at ``config_path``.

    Raises:
        ConfigError: If the file cannot be read, is not JSON, or is not an object
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ConfigError(f"Couldn't read config file: {config_path} does not exist")
    except OSError as e:
        raise ConfigError(f"Couldn't read config file: {e}")
    except json.JSONDecodeError as e:
        raise ConfigError(f"Couldn't parse config file: {e}")

    if not isinstance(data, dict):
        raise ConfigError("Couldn't parse config file: top level must be a JSON object")
    return data


def _parse_listen(data: dict, default_port: int) -> ServerConfig:
    listen_data = data.get("listen", {})
    if not isinstance(listen_data, dict):
        raise ConfigError("'listen' must be an object")

    port = listen_data.get("port", default_port)
    if not isinstance(port, int) or isinstance(port, bool) or not 0 < port < 65536:
        raise ConfigError(f"'listen.port' must be a TCP port number, got {port!r}")

    return ServerConfig(host=str(listen_data.get("host", "0.0.0.0")), port=port)


def _parse_logging(data: dict) -> LoggingConfig:
    config = LoggingConfig()
    logging_data = data.get("logging", {})
    if not isinstance(logging_data, dict):
        raise ConfigError("'logging' must be an object")

    log_file = logging_data.get("log_file")
    if log_file:
        log_file = str(Path(log_file).expanduser())

    config = LoggingConfig(
        level=str(logging_data.get("level", config.level)).upper(),
        log_file=log_file,
        console_output=logging_data.get("console_output", config.console_output),
        rotation=logging_data.get("rotation", config.rotation),
        retention=logging_data.get("retention", config.retention),
    )

    # Environment override
    env_level = os.environ.get("MUSIC_RELAY_LOG_LEVEL")
    if env_level:
        config.level = env_level.upper()

    if config.level not in LOG_LEVELS:
        raise ConfigError(
            f"Unknown log level {config.level!r}; expected one of {', '.join(LOG_LEVELS)}"
        )

    return config


def parse_node_config(data: dict) -> NodeConfig:
    """Build a NodeConfig from a parsed JSON document.

    Raises:
        ConfigError: If the artist list is missing or not a list
    """
    if "artists" not in data:
        raise ConfigError("Couldn't read artists from config file: key 'artists' missing")

    artists = data["artists"]
    if not isinstance(artists, list):
        raise ConfigError("Couldn't read artists from config file: 'artists' must be a list")

    public_url = data.get("public_url")
    if public_url is not None:
        if not isinstance(public_url, str) or not public_url.strip():
            raise ConfigError("'public_url' must be a non-empty string")
        public_url = public_url.strip().rstrip("/")

    return NodeConfig(
        listen=_parse_listen(data, DEFAULT_NODE_PORT),
        logging=_parse_logging(data),
        public_url=public_url,
        artists=artists,
    )


def parse_aggregator_config(data: dict) -> AggregatorConfig:
    """Build an AggregatorConfig from a parsed JSON document.

    The refresh interval is required and must be a positive integer. Server
    entries that are not valid addresses are logged and skipped.

    Raises:
        ConfigError: If the interval or the server list is missing or invalid
    """
    interval = data.get("refresh_iteration_seconds")
    if interval is None:
        raise ConfigError("No refresh iteration set: 'refresh_iteration_seconds' missing")
    if not isinstance(interval, int) or isinstance(interval, bool) or interval <= 0:
        raise ConfigError(
            f"'refresh_iteration_seconds' must be a positive integer, got {interval!r}"
        )

    if "servers" not in data:
        raise ConfigError("Couldn't read servers from config file: key 'servers' missing")
    raw_servers = data["servers"]
    if not isinstance(raw_servers, list):
        raise ConfigError("Couldn't read servers from config file: 'servers' must be a list")

    servers: List[str] = []
    for index, entry in enumerate(raw_servers):
        try:
            address = ServerAddress(address=entry).address
        except ValidationError as e:
            logger.warning(f"Skipping server #{index} ({entry!r}): {e.errors()[0]['msg']}")
            continue
        if address in servers:
            logger.warning(f"Skipping duplicate server #{index}: {address}")
            continue
        servers.append(address)

    timeout = data.get("request_timeout_seconds")
    if timeout is not None:
        if not isinstance(timeout, (int, float)) or isinstance(timeout, bool) or timeout <= 0:
            raise ConfigError(
                f"'request_timeout_seconds' must be a positive number, got {timeout!r}"
            )

    return AggregatorConfig(
        refresh_iteration_seconds=interval,
        servers=servers,
        listen=_parse_listen(data, DEFAULT_AGGREGATOR_PORT),
        logging=_parse_logging(data),
        request_timeout_seconds=timeout,
    )


def load_node_config(path: Optional[str] = None) -> NodeConfig:
    """Load the media node configuration.

    Raises:
        ConfigError: On any missing file, parse error or missing key
    """
    load_dotenv_file()
    return parse_node_config(read_config_document(get_config_path(path)))


def load_aggregator_config(path: Optional[str] = None) -> AggregatorConfig:
    """Load the aggregator configuration.

    Raises:
        ConfigError: On any missing file, parse error or missing key
    """
    load_dotenv_file()
    return parse_aggregator_config(read_config_document(get_config_path(path)))
