"""
Music Relay CLI - entry point for both roles.

    music-relay node        serve a local catalog (listing, covers, tracks)
    music-relay aggregator  poll media nodes and serve the combined view

Configuration problems are fatal: the process prints a diagnostic to stderr
and exits with status 1 before anything is served.
"""

import argparse
import sys
from typing import List, Optional

from music_relay.core.config import ConfigError, ServerConfig, load_aggregator_config, load_node_config
from music_relay.core.output import setup_loguru


def _apply_overrides(listen: ServerConfig, args: argparse.Namespace) -> ServerConfig:
    return ServerConfig(
        host=args.host if args.host else listen.host,
        port=args.port if args.port else listen.port,
    )


def run_node(args: argparse.Namespace) -> int:
    """Load the node catalog and serve it until interrupted.

    Returns:
        Exit code (0 for success, 1 for configuration failure)
    """
    try:
        config = load_node_config(args.config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_loguru(config.logging)

    import uvicorn
    from music_relay.domain.catalog.loader import build_catalog
    from web.backend.node_app import create_node_app

    catalog = build_catalog(config.artists)
    listen = _apply_overrides(config.listen, args)
    app = create_node_app(catalog, config)
    uvicorn.run(app, host=listen.host, port=listen.port, log_level=config.logging.level.lower())
    return 0


def run_aggregator(args: argparse.Namespace) -> int:
    """Start one poller per configured node and serve the aggregated view.

    Returns:
        Exit code (0 for success, 1 for configuration failure)
    """
    try:
        config = load_aggregator_config(args.config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_loguru(config.logging)

    import uvicorn
    from music_relay.domain.sync.aggregator import Aggregator
    from web.backend.aggregator_app import create_aggregator_app

    aggregator = Aggregator.from_config(config)
    listen = _apply_overrides(config.listen, args)
    app = create_aggregator_app(aggregator)
    uvicorn.run(app, host=listen.host, port=listen.port, log_level=config.logging.level.lower())
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="music-relay",
        description="Music Relay - share music catalogs between media nodes",
    )
    subparsers = parser.add_subparsers(dest="subcommand", required=True)

    for name, help_text, handler in (
        ("node", "Serve a local catalog over HTTP", run_node),
        ("aggregator", "Poll media nodes and serve the combined catalog", run_aggregator),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument(
            "--config",
            help="Path to the JSON config (default: $MUSIC_RELAY_CONFIG or ./config.json)",
        )
        sub.add_argument("--host", help="Override listen.host")
        sub.add_argument("--port", type=int, help="Override listen.port")
        sub.set_defaults(handler=handler)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the music-relay command."""
    args = build_parser().parse_args(argv)
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
