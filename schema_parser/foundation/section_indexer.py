# Path: schema_parser/foundation/section_indexer.py
"""
Top-Level Section Indexing

Finds top-level section headers in raw YAML text and cuts out the lines
that belong to one section, without parsing anything.

A header is a line holding a bare word followed by a colon and nothing
else, starting at column 0. Section bodies are the following blank or
indented lines. This trusts consistent indentation; it is a heuristic,
not a grammar-aware scan. Callers only see SectionSpan (name, start,
end), so the heuristic can be swapped for a real scanner.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Sequence, Union

from ..constants import SECTION_HEADER_PATTERN


_HEADER_RE = re.compile(SECTION_HEADER_PATTERN)


@dataclass(frozen=True)
class SectionSpan:
    """
    Location of a top-level section.

    Attributes:
        name: Section name
        start_line: Zero-based line of the header
        end_line: Zero-based line after the last line of the section
    """
    name: str
    start_line: int
    end_line: int

    @property
    def line_count(self) -> int:
        """Number of lines in the section, header included."""
        return self.end_line - self.start_line


def iter_lines(text: str) -> Iterator[str]:
    """
    Yield the lines of text split on '\\n', without building a list.

    A trailing newline produces a final empty line, matching str.split.
    """
    start = 0
    while True:
        end = text.find('\n', start)
        if end == -1:
            yield text[start:]
            return
        yield text[start:end]
        start = end + 1


def match_section_header(line: str) -> Optional[str]:
    """
    Return the section name when line is a top-level header.

    Args:
        line: One line of text, without its newline

    Returns:
        Section name or None
    """
    match = _HEADER_RE.match(line)
    return match.group(1) if match else None


def _is_section_body(line: str) -> bool:
    """Blank and indented lines belong to the open section."""
    return not line.strip() or line[0].isspace()


def index_sections(text: str) -> dict[str, int]:
    """
    Map every top-level section name to its header line.

    A name seen twice keeps the later line number.

    Args:
        text: Raw YAML text

    Returns:
        Ordered dict of section name to zero-based line number
    """
    return _index_lines(iter_lines(text))


def _index_lines(lines: Iterable[str]) -> dict[str, int]:
    sections: dict[str, int] = {}
    for line_number, line in enumerate(lines):
        name = match_section_header(line)
        if name is not None:
            sections[name] = line_number
    return sections


def find_section_end(lines: Sequence[str], start_line: int) -> int:
    """
    Find the line after the end of the section starting at start_line.

    Args:
        lines: Document lines
        start_line: Zero-based header line

    Returns:
        Zero-based exclusive end line
    """
    end = start_line + 1
    total = len(lines)
    while end < total and _is_section_body(lines[end]):
        end += 1
    return end


def extract_section(source: Union[str, Sequence[str]], start_line: int) -> str:
    """
    Return the text of the section whose header is at start_line.

    Args:
        source: Raw text or its lines
        start_line: Zero-based header line

    Returns:
        Header line plus its body, joined with '\\n'
    """
    lines = source.split('\n') if isinstance(source, str) else source
    if start_line < 0 or start_line >= len(lines):
        return ''
    end = find_section_end(lines, start_line)
    return '\n'.join(lines[start_line:end])


class SectionIndex:
    """
    Section index built once over a document.

    Holds the document lines so several sections can be extracted without
    re-splitting the text.

    Example:
        index = SectionIndex.build(content)

        if 'fields' in index:
            fields_yaml = index.extract('fields')
    """

    def __init__(self, lines: list[str], positions: dict[str, int]):
        self.lines = lines
        self.positions = positions

    @classmethod
    def build(cls, text: str) -> 'SectionIndex':
        """Index text."""
        lines = text.split('\n')
        return cls(lines, _index_lines(lines))

    def __contains__(self, name: str) -> bool:
        return name in self.positions

    def __len__(self) -> int:
        return len(self.positions)

    def names(self) -> list[str]:
        """Section names in header order."""
        return list(self.positions)

    def line_of(self, name: str) -> int:
        """Header line of section name (KeyError if absent)."""
        return self.positions[name]

    def span(self, name: str) -> SectionSpan:
        """Location of section name (KeyError if absent)."""
        start = self.positions[name]
        return SectionSpan(
            name=name,
            start_line=start,
            end_line=find_section_end(self.lines, start)
        )

    def spans(self) -> list[SectionSpan]:
        """Locations of every indexed section."""
        return [self.span(name) for name in self.positions]

    def extract(self, name: str) -> str:
        """Text of section name (KeyError if absent)."""
        return extract_section(self.lines, self.positions[name])


__all__ = [
    'SectionSpan',
    'SectionIndex',
    'iter_lines',
    'match_section_header',
    'index_sections',
    'find_section_end',
    'extract_section',
]
