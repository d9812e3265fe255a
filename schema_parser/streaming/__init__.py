# Path: schema_parser/streaming/__init__.py
"""
Streaming Module

Parsing and memory components for documents too large for a
single-buffer parse.

Components:
    - stream_parser: section-at-a-time line scanner with failure isolation
    - memory_manager: memory snapshots and memory ceiling negotiation

Example:
    from ..streaming import StreamingLineParser

    parser = StreamingLineParser()
    data = parser.parse(huge_yaml)

    if parser.errors:
        print(f"{len(parser.errors)} sections skipped")
"""

from ..streaming.stream_parser import (
    StreamingLineParser,
    PREAMBLE_SECTION,
)
from ..streaming.memory_manager import (
    MemorySnapshot,
    MemoryManager,
    MemoryCeiling,
    ProcessMemoryCeiling,
    FixedMemoryCeiling,
    MemoryGrant,
    MemoryNegotiator,
)

__all__ = [
    'StreamingLineParser',
    'PREAMBLE_SECTION',
    'MemorySnapshot',
    'MemoryManager',
    'MemoryCeiling',
    'ProcessMemoryCeiling',
    'FixedMemoryCeiling',
    'MemoryGrant',
    'MemoryNegotiator',
]
