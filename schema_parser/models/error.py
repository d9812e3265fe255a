# Path: schema_parser/models/error.py
"""
Error Handling System

Exception hierarchy and error records for YAML schema parsing.

This module defines:
- Severity and category tags for recorded errors
- Fatal exceptions raised to callers (syntax, missing section, memory)
- ParsingError records for failures that are recovered locally
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional
from datetime import datetime


# ==============================================================================
# ERROR SEVERITY LEVELS
# ==============================================================================

class ErrorSeverity(Enum):
    """
    Error severity classification.

    Levels:
        WARNING: Recovered locally (e.g., one streaming section skipped)
    """
    WARNING = "WARNING"

    def __str__(self) -> str:
        return self.value


# ==============================================================================
# ERROR CATEGORIES
# ==============================================================================

class ErrorCategory(Enum):
    """Error category classification for grouping related errors."""
    SECTION_LOCAL_FAILURE = "SECTION_LOCAL_FAILURE"

    def __str__(self) -> str:
        return self.value


# ==============================================================================
# EXCEPTIONS
# ==============================================================================

class SchemaParserError(Exception):
    """Base class for every error raised by the parsing engine."""


class YamlSyntaxError(SchemaParserError):
    """
    Grammar failure on a bounded buffer.

    Attributes:
        preview: First characters of the offending buffer
        line: 1-based line of the problem inside the buffer (if known)
        column: 1-based column of the problem (if known)
    """

    def __init__(
        self,
        message: str,
        preview: str = "",
        line: Optional[int] = None,
        column: Optional[int] = None
    ):
        super().__init__(message)
        self.preview = preview
        self.line = line
        self.column = column


class SectionNotFoundError(SchemaParserError):
    """Requested top-level section is absent from the document."""

    def __init__(self, section_name: str, available_sections: Optional[list[str]] = None):
        super().__init__(f"Section '{section_name}' not found in YAML content")
        self.section_name = section_name
        self.available_sections = available_sections or []


class MemoryLimitUnavailableError(SchemaParserError):
    """The memory ceiling could not be widened for a chunked parse."""

    def __init__(self, required_bytes: int, requested_limit: Optional[int] = None):
        message = f"Unable to reserve {required_bytes} bytes for chunked parse"
        if requested_limit is not None:
            message += f" (requested ceiling {requested_limit} bytes)"
        super().__init__(message)
        self.required_bytes = required_bytes
        self.requested_limit = requested_limit


# ==============================================================================
# PARSING ERROR RECORD
# ==============================================================================

@dataclass
class ParsingError:
    """
    Record of an error that was handled without raising.

    Attributes:
        severity: Error severity level
        category: Error category
        message: Human-readable error message
        section: Section the error belongs to (optional)
        line_number: Document line where the section started (optional)
        details: Additional error details (optional)
        timestamp: When error occurred
        recovered: Whether processing continued past the error
    """
    severity: ErrorSeverity
    category: ErrorCategory
    message: str
    section: Optional[str] = None
    line_number: Optional[int] = None
    details: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)
    recovered: bool = False

    def __str__(self) -> str:
        """String representation for logging."""
        parts = [f"[{self.severity.value}] {self.category.value}: {self.message}"]

        if self.section:
            location = self.section
            if self.line_number is not None:
                location += f" (line {self.line_number})"
            parts.append(f"Section: {location}")

        if self.details:
            parts.append(f"Details: {self.details}")

        return " | ".join(parts)

    def to_dict(self) -> dict[str, any]:
        """Convert to dictionary for serialization."""
        return {
            'severity': self.severity.value,
            'category': self.category.value,
            'message': self.message,
            'section': self.section,
            'line_number': self.line_number,
            'details': self.details,
            'timestamp': self.timestamp.isoformat(),
            'recovered': self.recovered
        }


def create_section_failure(
    section: str,
    message: str,
    line_number: Optional[int] = None,
    details: Optional[str] = None
) -> ParsingError:
    """Create the WARNING record used when a streaming section is skipped."""
    return ParsingError(
        severity=ErrorSeverity.WARNING,
        category=ErrorCategory.SECTION_LOCAL_FAILURE,
        message=message,
        section=section,
        line_number=line_number,
        details=details,
        recovered=True
    )


__all__ = [
    'ErrorSeverity',
    'ErrorCategory',
    'SchemaParserError',
    'YamlSyntaxError',
    'SectionNotFoundError',
    'MemoryLimitUnavailableError',
    'ParsingError',
    'create_section_failure',
]
