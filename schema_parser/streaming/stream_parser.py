# Path: schema_parser/streaming/stream_parser.py
"""
Streaming YAML Parser

Single-pass, section-at-a-time parser for very large YAML documents.

The text is scanned line by line. Lines accumulate in a buffer until the
next top-level header; the buffer is then parsed on its own and merged
into the result. A section that fails to parse is recorded, logged and
left out of the result, and the scan carries on. Lines before the first
header are parsed as a preamble buffer.

"Streaming" means incremental scanning of a string already in memory,
not asynchronous I/O.
"""

import logging
from typing import Any, Optional

from ..constants import GC_INTERVAL_LINES, GC_GENERATION
from ..foundation.section_indexer import iter_lines, match_section_header
from ..foundation.yaml_parser import SingleBufferParser
from ..models.error import ParsingError, YamlSyntaxError, create_section_failure
from ..observability.event_logger import ParseEventLogger
from ..streaming.memory_manager import MemoryManager


PREAMBLE_SECTION = '(preamble)'


class StreamingLineParser:
    """
    Streaming parser that isolates section failures.

    Example:
        parser = StreamingLineParser(gc_interval_lines=1000)

        data = parser.parse(huge_yaml)
        for error in parser.errors:
            print(f"Skipped: {error.section}")
    """

    def __init__(
        self,
        buffer_parser: Optional[SingleBufferParser] = None,
        gc_interval_lines: int = GC_INTERVAL_LINES,
        gc_generation: int = GC_GENERATION,
        event_logger: Optional[ParseEventLogger] = None,
        memory_manager: Optional[MemoryManager] = None
    ):
        """
        Initialize streaming parser.

        Args:
            buffer_parser: Parser for each section buffer
            gc_interval_lines: Lines between GC hints (0 disables hints)
            gc_generation: Generation collected by each hint
            event_logger: Receives a warning event per skipped section
            memory_manager: Issues the GC hints
        """
        self.buffer_parser = buffer_parser or SingleBufferParser()
        self.gc_interval_lines = gc_interval_lines
        self.gc_generation = gc_generation
        self.events = event_logger or ParseEventLogger(enabled=False)
        self.memory_manager = memory_manager or MemoryManager()
        self.logger = logging.getLogger(__name__)

        # State of the last parse
        self.errors: list[ParsingError] = []

        # Statistics
        self.lines_scanned = 0
        self.sections_parsed = 0
        self.sections_failed = 0
        self.gc_hints = 0

    def parse(self, text: str) -> dict[str, Any]:
        """
        Parse text one top-level section at a time.

        Args:
            text: Raw YAML text

        Returns:
            Mapping of every section that parsed; failed sections absent
        """
        self.errors = []
        self.lines_scanned = 0
        self.sections_parsed = 0
        self.sections_failed = 0
        self.gc_hints = 0

        result: dict[str, Any] = {}
        buffer: list[str] = []
        section = PREAMBLE_SECTION
        section_start = 0

        for line_number, line in enumerate(iter_lines(text)):
            header = match_section_header(line)
            if header is not None:
                self._finalize(section, section_start, buffer, result)
                buffer = []
                section = header
                section_start = line_number

            buffer.append(line)
            self.lines_scanned += 1

            if self.gc_interval_lines and self.lines_scanned % self.gc_interval_lines == 0:
                self.memory_manager.gc_hint(self.gc_generation)
                self.gc_hints += 1

        self._finalize(section, section_start, buffer, result)

        self.logger.debug(
            f"Streaming parse done: {self.sections_parsed} sections, "
            f"{self.sections_failed} skipped, {self.lines_scanned} lines"
        )

        return result

    def _finalize(
        self,
        section: str,
        start_line: int,
        buffer: list[str],
        result: dict[str, Any]
    ) -> None:
        """Parse one buffer and merge it into result, or record its failure."""
        if not buffer:
            return

        try:
            data = self.buffer_parser.parse_mapping('\n'.join(buffer))
        except YamlSyntaxError as e:
            self._record_failure(section, start_line, e)
            return

        if data:
            result.update(data)
        if section != PREAMBLE_SECTION or data:
            self.sections_parsed += 1

    def _record_failure(self, section: str, start_line: int, error: YamlSyntaxError) -> None:
        self.sections_failed += 1

        failure = create_section_failure(
            section=section,
            message=str(error),
            line_number=start_line + 1,
            details=error.preview
        )
        self.errors.append(failure)

        self.logger.warning(str(failure))
        self.events.log_warning(
            f"Section '{section}' skipped: {error}",
            context={
                'section': section,
                'line': start_line + 1,
                'error_line': error.line,
            },
            recommendation="Fix the YAML syntax of this section"
        )

    def get_statistics(self) -> dict[str, int]:
        """Get statistics of the last parse."""
        return {
            'lines_scanned': self.lines_scanned,
            'sections_parsed': self.sections_parsed,
            'sections_failed': self.sections_failed,
            'gc_hints': self.gc_hints,
        }


__all__ = ['StreamingLineParser', 'PREAMBLE_SECTION']
