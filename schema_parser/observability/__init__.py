# Path: schema_parser/observability/__init__.py
"""
Observability Module

Components for monitoring the parsing engine.

This module provides:
- Per-engine performance counters and derived rates
- Structured start/end/performance/warning/error events

Example:
    from ..observability import PerformanceMetrics, ParseEventLogger

    metrics = PerformanceMetrics()
    metrics.record_parse()

    events = ParseEventLogger()
    events.log_performance('yaml_parsing', {'execution_time_ms': 4.1})
"""

from ..observability.metrics import PerformanceMetrics
from ..observability.event_logger import ParseEventLogger, format_bytes
from ..observability.constants import EventType, EVENTS_LOGGER_NAME
from ..observability import constants


__all__ = [
    # Metrics
    'PerformanceMetrics',

    # Events
    'ParseEventLogger',
    'EventType',
    'EVENTS_LOGGER_NAME',
    'format_bytes',

    # Constants
    'constants',
]
