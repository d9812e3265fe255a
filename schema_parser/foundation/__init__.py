# Path: schema_parser/foundation/__init__.py
"""
Foundation layer components.

Section indexing, single-buffer YAML parsing and content fingerprints.
"""

from ..foundation.section_indexer import (
    SectionSpan,
    SectionIndex,
    iter_lines,
    match_section_header,
    index_sections,
    find_section_end,
    extract_section,
)
from ..foundation.yaml_parser import SingleBufferParser, content_preview
from ..foundation.fingerprint import content_fingerprint, cache_key

__all__ = [
    # Section indexing
    'SectionSpan',
    'SectionIndex',
    'iter_lines',
    'match_section_header',
    'index_sections',
    'find_section_end',
    'extract_section',
    # Parsing
    'SingleBufferParser',
    'content_preview',
    # Fingerprints
    'content_fingerprint',
    'cache_key',
]
