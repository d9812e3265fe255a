# Path: schema_parser/parser_modes.py
"""
Parsing Strategy Configurations

The strategies the engine can pick from and the size-based selector.
"""

from enum import Enum
from dataclasses import dataclass

from .constants import LARGE_THRESHOLD_BYTES, STREAMING_THRESHOLD_BYTES


class ParsingStrategy(str, Enum):
    """Parsing strategy selection."""
    STANDARD = "standard"
    LAZY = "lazy"
    STREAMING = "streaming"


@dataclass
class StrategyConfiguration:
    """Configuration for a parsing strategy."""
    strategy: ParsingStrategy
    parses_whole_buffer: bool = True
    honours_section_selection: bool = False
    isolates_section_failures: bool = False
    uses_memory_negotiation: bool = False
    description: str = ""


STRATEGY_CONFIGURATIONS = {
    ParsingStrategy.STANDARD: StrategyConfiguration(
        strategy=ParsingStrategy.STANDARD,
        parses_whole_buffer=True,
        honours_section_selection=False,
        isolates_section_failures=False,
        uses_memory_negotiation=False,
        description="Single-buffer parse of the whole document"
    ),

    ParsingStrategy.LAZY: StrategyConfiguration(
        strategy=ParsingStrategy.LAZY,
        parses_whole_buffer=False,
        honours_section_selection=True,
        isolates_section_failures=False,
        uses_memory_negotiation=True,
        description="Parse requested top-level sections only"
    ),

    ParsingStrategy.STREAMING: StrategyConfiguration(
        strategy=ParsingStrategy.STREAMING,
        parses_whole_buffer=False,
        honours_section_selection=False,
        isolates_section_failures=True,
        uses_memory_negotiation=False,
        description="Line-by-line scan, one section at a time, skipping broken sections"
    ),
}


def select_strategy(
    content_size: int,
    large_threshold: int = LARGE_THRESHOLD_BYTES,
    streaming_threshold: int = STREAMING_THRESHOLD_BYTES
) -> ParsingStrategy:
    """
    Pick a strategy from content size alone.

    Args:
        content_size: Document length in characters
        large_threshold: Sizes above this use lazy parsing
        streaming_threshold: Sizes above this use streaming parsing

    Returns:
        ParsingStrategy for the size
    """
    if content_size > streaming_threshold:
        return ParsingStrategy.STREAMING
    if content_size > large_threshold:
        return ParsingStrategy.LAZY
    return ParsingStrategy.STANDARD


def get_strategy_config(strategy: ParsingStrategy) -> StrategyConfiguration:
    """Get configuration for strategy."""
    return STRATEGY_CONFIGURATIONS[strategy]


def list_strategies() -> list:
    """list available strategies with descriptions."""
    return [
        f"{strategy.value}: {config.description}"
        for strategy, config in STRATEGY_CONFIGURATIONS.items()
    ]


__all__ = [
    'ParsingStrategy',
    'StrategyConfiguration',
    'select_strategy',
    'get_strategy_config',
    'list_strategies',
]
