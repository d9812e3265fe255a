# Path: schema_parser/models/result.py
"""
Parse Result Models

Containers returned by the parsing engine.

This module provides:
- ParsedSection: one top-level section and its value tree
- ParseResult: read-only mapping of section name to value, tagged with
  the strategy that produced it and whether it came from cache
- ValidationReport: outcome of the structural quick check
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Iterator

from ..parser_modes import ParsingStrategy


@dataclass(frozen=True)
class ParsedSection:
    """
    A top-level section paired with its parsed value.

    Attributes:
        name: Section name (root key)
        value: Parsed value tree
    """
    name: str
    value: Any


@dataclass(eq=False)
class ParseResult(Mapping):
    """
    Parsed document content.

    Behaves as a read-only mapping over the parsed data. Two results
    compare equal when their content is equal, whatever strategy or
    cache state produced them.

    Attributes:
        data: Section name to parsed value
        strategy: Strategy that produced the data
        from_cache: True when served from the result cache
        content_size: Length of the source text
        fingerprint: Content fingerprint of the source text
    """
    data: dict[str, Any] = field(default_factory=dict)
    strategy: ParsingStrategy = ParsingStrategy.STANDARD
    from_cache: bool = False
    content_size: int = 0
    fingerprint: str = ""

    def __getitem__(self, key: str) -> Any:
        return self.data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)

    @property
    def sections(self) -> list[ParsedSection]:
        """Sections in document order."""
        return [ParsedSection(name=name, value=value) for name, value in self.data.items()]

    def to_dict(self) -> dict[str, Any]:
        """Plain dict copy of the parsed data."""
        return dict(self.data)

    def __repr__(self) -> str:
        return (
            f"ParseResult(sections={list(self.data)}, "
            f"strategy={self.strategy.value}, from_cache={self.from_cache})"
        )


@dataclass
class ValidationReport:
    """
    Structural sanity check outcome.

    Attributes:
        errors: Problems that make the content unusable
        warnings: Problems that may cause parsing trouble
    """
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """True when no errors were found."""
        return not self.errors

    def to_dict(self) -> dict[str, list[str]]:
        """Convert to dictionary."""
        return {
            'errors': list(self.errors),
            'warnings': list(self.warnings),
        }


__all__ = [
    'ParsedSection',
    'ParseResult',
    'ValidationReport',
]
