# Path: schema_parser/logger/__init__.py
"""
schema_parser Logger Package

Logging setup with a combined activity log and a separate stream for
structured parse events.
"""

from .engine_logging import (
    ChannelFilter,
    StructuredFormatter,
    setup_logging,
)

__all__ = [
    'ChannelFilter',
    'StructuredFormatter',
    'setup_logging',
]
