# Path: schema_parser/__init__.py
"""
Schema Parser Package

Adaptive YAML parsing for schema documents from a few KB to tens of MB.

This package provides:
- ParsingEngine: size-adaptive parser with result cache and metrics
- ParsingStrategy: standard, lazy and streaming strategies
- EngineConfig: validated engine configuration
- Errors raised to callers (YamlSyntaxError, SectionNotFoundError, ...)

Example:
    from schema_parser import ParsingEngine

    engine = ParsingEngine()
    result = engine.parse_content(content)

    # Only one section, without parsing the rest
    fields = engine.parse_section(content, 'fields')

    # Configured from .env / SCHEMA_PARSER_* variables
    engine = ParsingEngine.from_environment()
"""

# Main engine
from .engine import ParsingEngine

# Strategies
from .parser_modes import (
    ParsingStrategy,
    StrategyConfiguration,
    select_strategy,
    get_strategy_config,
    list_strategies,
)

# Models
from .models import (
    EngineConfig,
    ParseResult,
    ParsedSection,
    ValidationReport,
    SchemaParserError,
    YamlSyntaxError,
    SectionNotFoundError,
    MemoryLimitUnavailableError,
)

# Configuration & logging
from .config_loader import ConfigLoader
from .logger import setup_logging

# Version info
__version__ = '1.0.0'


__all__ = [
    # Main engine
    'ParsingEngine',

    # Strategies
    'ParsingStrategy',
    'StrategyConfiguration',
    'select_strategy',
    'get_strategy_config',
    'list_strategies',

    # Models
    'EngineConfig',
    'ParseResult',
    'ParsedSection',
    'ValidationReport',
    'SchemaParserError',
    'YamlSyntaxError',
    'SectionNotFoundError',
    'MemoryLimitUnavailableError',

    # Configuration & logging
    'ConfigLoader',
    'setup_logging',

    # Version
    '__version__',
]
