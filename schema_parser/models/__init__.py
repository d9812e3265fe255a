# Path: schema_parser/models/__init__.py
"""
Schema Parser Data Models

- Engine configuration
- Error handling
- Parse results and validation reports
"""

# ==============================================================================
# CONFIGURATION
# ==============================================================================

from ..models.config import EngineConfig

# ==============================================================================
# ERROR HANDLING
# ==============================================================================

from ..models.error import (
    # Enums
    ErrorSeverity,
    ErrorCategory,
    # Exceptions
    SchemaParserError,
    YamlSyntaxError,
    SectionNotFoundError,
    MemoryLimitUnavailableError,
    # Classes
    ParsingError,
    # Helper functions
    create_section_failure,
)

# ==============================================================================
# RESULTS
# ==============================================================================

from ..models.result import (
    ParsedSection,
    ParseResult,
    ValidationReport,
)

__all__ = [
    # Configuration
    'EngineConfig',

    # Errors
    'ErrorSeverity',
    'ErrorCategory',
    'SchemaParserError',
    'YamlSyntaxError',
    'SectionNotFoundError',
    'MemoryLimitUnavailableError',
    'ParsingError',
    'create_section_failure',

    # Results
    'ParsedSection',
    'ParseResult',
    'ValidationReport',
]
