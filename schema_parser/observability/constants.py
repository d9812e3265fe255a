# Path: schema_parser/observability/constants.py
"""
Observability Constants

Central repository for metric names and structured event settings.
"""

from enum import Enum


# ==============================================================================
# METRICS CONSTANTS
# ==============================================================================

METRIC_TOTAL_PARSES = "total_parses"
METRIC_CACHE_HITS = "cache_hits"
METRIC_CACHE_MISSES = "cache_misses"
METRIC_LAZY_LOADS = "lazy_loads"
METRIC_STREAMING_PARSES = "streaming_parses"
METRIC_MEMORY_SAVED = "memory_saved_bytes"
METRIC_TIME_SAVED = "time_saved_ms"

# Decimal places kept on derived percentages
RATE_PRECISION = 2


# ==============================================================================
# EVENT CONSTANTS
# ==============================================================================

class EventType(str, Enum):
    """Structured event kinds emitted by the engine."""
    OPERATION_START = "operation_start"
    OPERATION_END = "operation_end"
    PERFORMANCE = "performance"
    WARNING = "warning"
    ERROR = "error"
    DEBUG = "debug"


# Logger name for structured events (filtered into their own log file)
EVENTS_LOGGER_NAME = "schema_parser.events"

# Session ids are the first characters of a uuid4 hex
SESSION_ID_LENGTH = 8

# Operation names
OPERATION_PARSE_CONTENT = "optimized_yaml_parse"
OPERATION_PARSING_PERFORMANCE = "yaml_parsing"
OPERATION_SECTION_PARSE = "section_only_parse"
OPERATION_QUICK_VALIDATE = "quick_validate"
