# Path: schema_parser/constants.py
"""
Constants for Schema Parser Module

Thresholds, patterns and limits used across the parsing engine.
Follows the no-hardcoded-values principle.
"""

# ============================================================================
# STRATEGY SELECTION - SIZE THRESHOLDS
# ============================================================================

# Content size thresholds (characters)
LARGE_THRESHOLD_BYTES = 1024 * 1024          # > 1MB: lazy section parsing
STREAMING_THRESHOLD_BYTES = 5 * 1024 * 1024  # > 5MB: streaming line parsing

# Sections parsed by the lazy strategy when the caller names none
DEFAULT_LAZY_SECTIONS = ['core']

# Selection token meaning "every section"
WILDCARD_SECTION = '*'

# ============================================================================
# SECTION DETECTION
# ============================================================================

# Top-level header: bare word + colon, nothing else, column 0
SECTION_HEADER_PATTERN = r'^(\w+):\s*$'

# ============================================================================
# RESULT CACHE
# ============================================================================

CACHE_MAX_ENTRIES = 100     # Prune once entry count exceeds this
CACHE_RETAIN_ENTRIES = 50   # Most recently inserted entries kept on prune

# ============================================================================
# MEMORY NEGOTIATION
# ============================================================================

MEMORY_MULTIPLIER = 3.0                   # Parse tree overhead vs. raw text
MEMORY_MARGIN_BYTES = 50 * 1024 * 1024    # Extra headroom when widening
CHUNK_SIZE_BYTES = 100 * 1024             # Below this, chunked parse is direct

# ============================================================================
# STREAMING
# ============================================================================

GC_INTERVAL_LINES = 1000    # Lines between garbage-collection hints
GC_GENERATION = 0           # Generation collected by each hint

# ============================================================================
# DIAGNOSTICS
# ============================================================================

PREVIEW_LENGTH = 100        # Characters of content quoted in errors

# Indentation
MAX_RECOMMENDED_INDENT = 4

# Characters that commonly break YAML scanners (tab and newlines excluded)
CONTROL_CHARACTER_PATTERN = r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]'
