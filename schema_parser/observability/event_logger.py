# Path: schema_parser/observability/event_logger.py
"""
Structured Parse Events

Emits start/end/performance/warning/error events for engine operations
on the schema_parser.events logger. Formatting and storage belong to the
handlers installed by logger.setup_logging (or by the host application).

Every record carries:
    event: EventType value
    event_data: dict with session id, operation and event-specific fields

Example:
    events = ParseEventLogger()

    events.log_operation_start('optimized_yaml_parse', content_size=2048)
    ...
    events.log_performance('yaml_parsing', {'execution_time_ms': 3.2})
    events.log_operation_end('optimized_yaml_parse', {'success': True})
"""

import logging
import time
import uuid
from typing import Any, Optional

import psutil

from .constants import EventType, EVENTS_LOGGER_NAME, SESSION_ID_LENGTH


def format_bytes(size: float) -> str:
    """Human-readable byte count."""
    for unit in ('B', 'KB', 'MB', 'GB'):
        if abs(size) < 1024.0:
            return f"{size:.2f} {unit}"
        size /= 1024.0
    return f"{size:.2f} TB"


class ParseEventLogger:
    """
    Logging collaborator for the parsing engine.

    Keeps a stack of open operations so end events report their duration,
    and a session id that ties the events of one engine together.
    """

    def __init__(self, enabled: bool = True, logger: Optional[logging.Logger] = None):
        """
        Initialize event logger.

        Args:
            enabled: Emit events (False turns every method into a no-op)
            logger: Target logger (defaults to schema_parser.events)
        """
        self.enabled = enabled
        self.logger = logger or logging.getLogger(EVENTS_LOGGER_NAME)
        self.session_id = uuid.uuid4().hex[:SESSION_ID_LENGTH]
        self.session_start = time.perf_counter()
        self._context_stack: list[dict[str, Any]] = []
        self._process = psutil.Process()

    # ------------------------------------------------------------------
    # Operation lifecycle
    # ------------------------------------------------------------------

    def log_operation_start(self, operation: str, **context: Any) -> None:
        """Open operation and emit a start event."""
        if not self.enabled:
            return

        self._context_stack.append({
            'operation': operation,
            'start_time': time.perf_counter(),
            'context': context,
        })

        self._emit(
            logging.INFO,
            EventType.OPERATION_START,
            f"Starting {operation}",
            operation=operation,
            context=context,
            context_depth=len(self._context_stack),
        )

    def log_operation_end(self, operation: str, metrics: Optional[dict[str, Any]] = None) -> None:
        """Close operation and emit an end event with its duration."""
        if not self.enabled:
            return

        entry = self._pop_context(operation)
        duration_ms = None
        if entry is not None:
            duration_ms = round((time.perf_counter() - entry['start_time']) * 1000, 2)

        self._emit(
            logging.INFO,
            EventType.OPERATION_END,
            f"Completed {operation}",
            operation=operation,
            duration_ms=duration_ms,
            metrics=metrics or {},
            context_depth=len(self._context_stack),
        )

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def log_performance(self, operation: str, metrics: dict[str, Any]) -> None:
        """Emit performance figures for operation."""
        if not self.enabled:
            return

        self._emit(
            logging.INFO,
            EventType.PERFORMANCE,
            f"Performance: {operation}",
            operation=operation,
            metrics=metrics,
            session_duration_ms=round((time.perf_counter() - self.session_start) * 1000, 2),
        )

    def log_warning(
        self,
        message: str,
        context: Optional[dict[str, Any]] = None,
        recommendation: Optional[str] = None
    ) -> None:
        """Emit a recoverable problem, with an optional recommendation."""
        if not self.enabled:
            return

        data: dict[str, Any] = {'context': context or {}}
        if recommendation:
            data['recommendation'] = recommendation

        self._emit(logging.WARNING, EventType.WARNING, message, **data)

    def log_error(
        self,
        message: str,
        exception: Optional[BaseException] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        """Emit a fatal problem. The open operation is abandoned."""
        if not self.enabled:
            return

        data: dict[str, Any] = {
            'context': context or {},
            'context_stack': [entry['operation'] for entry in self._context_stack],
        }
        if exception is not None:
            data['exception'] = {
                'class': type(exception).__name__,
                'message': str(exception),
            }

        current = self.current_operation()
        if current is not None:
            self._pop_context(current)

        self._emit(logging.ERROR, EventType.ERROR, message, **data)

    def log_debug(self, message: str, **data: Any) -> None:
        """Emit debugging detail."""
        if not self.enabled:
            return

        self._emit(logging.DEBUG, EventType.DEBUG, message, data=data)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def current_operation(self) -> Optional[str]:
        """Innermost open operation."""
        if not self._context_stack:
            return None
        return self._context_stack[-1]['operation']

    def memory_usage(self) -> int:
        """Resident set size of this process in bytes."""
        return self._process.memory_info().rss

    def _pop_context(self, operation: str) -> Optional[dict[str, Any]]:
        """Remove the innermost entry for operation."""
        for position in range(len(self._context_stack) - 1, -1, -1):
            if self._context_stack[position]['operation'] == operation:
                return self._context_stack.pop(position)
        return None

    def _emit(self, level: int, event: EventType, message: str, **data: Any) -> None:
        if not self.logger.isEnabledFor(level):
            return

        event_data = {
            'session_id': self.session_id,
            'current_operation': self.current_operation(),
            'memory_usage': format_bytes(self.memory_usage()),
        }
        event_data.update(data)

        self.logger.log(
            level,
            message,
            extra={'event': event.value, 'event_data': event_data}
        )


__all__ = ['ParseEventLogger', 'format_bytes']
