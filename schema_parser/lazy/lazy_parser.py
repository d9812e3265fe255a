# Path: schema_parser/lazy/lazy_parser.py
"""
Lazy Section Parser

Parses only the top-level sections a caller asks for.

The document is indexed once; each requested section is cut out of the
text and parsed on its own. Requesting every section ('*' or an empty
selection) falls back to a chunked full parse guarded by the memory
negotiator.
"""

import logging
from typing import Any, Iterable, Optional

from ..constants import CHUNK_SIZE_BYTES, WILDCARD_SECTION
from ..foundation.section_indexer import SectionIndex
from ..foundation.yaml_parser import SingleBufferParser
from ..models.error import SectionNotFoundError
from ..observability.event_logger import ParseEventLogger
from ..observability.metrics import PerformanceMetrics
from ..streaming.memory_manager import MemoryNegotiator


class LazySectionParser:
    """
    Section-selective parser.

    Example:
        parser = LazySectionParser()

        data = parser.parse(content, ['core', 'fields'])
        # {'core': {...}, 'fields': {...}}
    """

    def __init__(
        self,
        buffer_parser: Optional[SingleBufferParser] = None,
        negotiator: Optional[MemoryNegotiator] = None,
        metrics: Optional[PerformanceMetrics] = None,
        chunk_size_bytes: int = CHUNK_SIZE_BYTES,
        event_logger: Optional[ParseEventLogger] = None
    ):
        """
        Initialize lazy parser.

        Args:
            buffer_parser: Parser for each section slice
            negotiator: Memory negotiator for the chunked full parse
            metrics: Receives memory-saved figures
            chunk_size_bytes: Full parses at or below this size skip negotiation
            event_logger: Receives a warning when memory cannot be reserved
        """
        self.buffer_parser = buffer_parser or SingleBufferParser()
        self.negotiator = negotiator or MemoryNegotiator()
        self.metrics = metrics if metrics is not None else PerformanceMetrics()
        self.chunk_size_bytes = chunk_size_bytes
        self.events = event_logger or ParseEventLogger(enabled=False)
        self.logger = logging.getLogger(__name__)

    def parse(self, text: str, sections: Optional[Iterable[str]] = None) -> dict[str, Any]:
        """
        Parse the selected sections of text.

        Args:
            text: Raw YAML text
            sections: Section names; empty, None or containing '*' means all

        Returns:
            Mapping of each found section name to its value. Names absent
            from the document are left out.

        Raises:
            YamlSyntaxError: If a selected section is malformed
            MemoryLimitUnavailableError: If a full parse cannot reserve memory
        """
        selection = list(dict.fromkeys(sections or []))

        if not selection or WILDCARD_SECTION in selection:
            return self.parse_chunked(text)

        index = SectionIndex.build(text)
        result: dict[str, Any] = {}
        parsed_size = 0

        for name in selection:
            if name not in index:
                self.logger.debug(f"Requested section not in document: {name}")
                continue

            section_text = index.extract(name)
            parsed_size += len(section_text)
            result[name] = self.buffer_parser.parse_section_value(section_text)

        self.metrics.add_memory_saved(len(text) - parsed_size)
        return result

    def parse_chunked(self, text: str) -> dict[str, Any]:
        """
        Parse the whole document under a negotiated memory ceiling.

        Args:
            text: Raw YAML text

        Returns:
            Parsed mapping ({} when memory could not be reserved and the
            negotiator is configured not to raise)
        """
        size = len(text)
        if size <= self.chunk_size_bytes:
            return self.buffer_parser.parse_mapping(text)

        required = self.negotiator.estimate(size)

        with self.negotiator.negotiate(required) as grant:
            if not grant.granted:
                self.events.log_warning(
                    "Memory ceiling could not be raised; returning empty result",
                    context={
                        'content_size': size,
                        'required_bytes': required,
                        'requested_limit': grant.requested_limit,
                    },
                    recommendation="Raise the process memory limit or request specific sections"
                )
                return {}

            data = self.buffer_parser.parse_mapping(text)

        self.metrics.add_memory_saved(required)
        return data

    def extract(self, text: str, name: str) -> str:
        """
        Cut the text of one section out of the document.

        Raises:
            SectionNotFoundError: If the document has no such section
        """
        index = SectionIndex.build(text)
        if name not in index:
            raise SectionNotFoundError(name, index.names())
        return index.extract(name)


__all__ = ['LazySectionParser']
