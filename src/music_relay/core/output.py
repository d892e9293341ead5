"""
Logging setup using Loguru.

Console output goes to stderr (servers keep stdout free); an optional
rotating file sink captures the same records.
"""

import sys

from loguru import logger

from .config import LoggingConfig

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | {message}"


def setup_loguru(config: LoggingConfig) -> None:
    """
    Configure loguru sinks from the logging section of the config.

    Args:
        config: Logging configuration (level, file sink, console flag)
    """
    # Remove default handler
    logger.remove()

    if config.console_output:
        logger.add(sys.stderr, level=config.level, format=LOG_FORMAT)

    if config.log_file:
        logger.add(
            config.log_file,
            rotation=config.rotation,
            retention=config.retention,
            level=config.level,
            format=LOG_FORMAT,
            enqueue=True,  # Poller threads and request handlers log concurrently
        )

    logger.info(
        f"Loguru initialized (level={config.level}, "
        f"file={config.log_file or 'none'}, console={config.console_output})"
    )
