# Path: schema_parser/logger/engine_logging.py
"""
Logging Setup for schema_parser

This module sets up logging with separate files for:
- Structured parse events (schema_parser.events logger)
- Full activity (everything combined)
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from ..observability.constants import EVENTS_LOGGER_NAME


class ChannelFilter(logging.Filter):
    """Filter logs by logger name prefix."""

    def __init__(self, channel: str):
        """
        Initialize filter for a logger channel.

        Args:
            channel: Logger name prefix, e.g. 'schema_parser.events'
        """
        super().__init__()
        self.channel = channel

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter records by logger name prefix."""
        return record.name.startswith(self.channel)


class StructuredFormatter(logging.Formatter):
    """Append a record's event_data (if any) to the formatted message."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        event_data = getattr(record, 'event_data', None)
        if event_data:
            rendered = ', '.join(f"{key}={value}" for key, value in event_data.items())
            message = f"{message} | {rendered}"
        return message


def setup_logging(
    log_dir: Optional[Path] = None,
    log_level: str = 'INFO',
    console_output: bool = True,
    main_log: str = 'full_activity.log',
    events_log: str = 'parse_events.log'
) -> None:
    """
    Set up logging for schema_parser.

    Creates (when log_dir is given):
    - full_activity.log (all activities combined)
    - parse_events.log (structured engine events only)

    Args:
        log_dir: Directory for log files (None for console only)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        console_output: Whether to also output to console
        main_log: File name of the combined log
        events_log: File name of the events log

    Example:
        setup_logging(
            log_dir=Path('/var/log/schema_parser'),
            log_level='INFO',
            console_output=True
        )
    """
    level = getattr(logging, log_level.upper())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Clear any existing handlers
    root_logger.handlers.clear()

    formatter = StructuredFormatter(
        '[%(asctime)s] [%(levelname)s] %(name)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        # Full activity log (everything)
        full_handler = logging.FileHandler(log_dir / main_log)
        full_handler.setLevel(logging.DEBUG)
        full_handler.setFormatter(formatter)
        root_logger.addHandler(full_handler)

        # Parse events log
        events_handler = logging.FileHandler(log_dir / events_log)
        events_handler.setLevel(logging.DEBUG)
        events_handler.setFormatter(formatter)
        events_handler.addFilter(ChannelFilter(EVENTS_LOGGER_NAME))
        root_logger.addHandler(events_handler)

    # Console output (optional)
    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        # Simpler format for console
        console_formatter = logging.Formatter(
            '[%(levelname)s] %(name)s - %(message)s'
        )
        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)


__all__ = [
    'ChannelFilter',
    'StructuredFormatter',
    'setup_logging',
]
