# Path: schema_parser/foundation/yaml_parser.py
"""
YAML Processing Engine

Single-buffer YAML parsing: the only place that talks to PyYAML.

Used directly for small documents and as the leaf operation of the lazy
and streaming strategies on their sub-slices. Grammar failures are
re-raised as YamlSyntaxError with a short preview of the buffer and the
line/column PyYAML reported.
"""

import logging
from typing import Any, Optional

import yaml

from ..constants import PREVIEW_LENGTH
from ..models.error import YamlSyntaxError


# libyaml bindings are optional in PyYAML builds
_LOADER = getattr(yaml, 'CSafeLoader', yaml.SafeLoader)


def content_preview(content: str, length: int = PREVIEW_LENGTH) -> str:
    """First length characters of content."""
    return content[:length]


class SingleBufferParser:
    """
    Parser for one bounded YAML buffer.

    Example:
        parser = SingleBufferParser()
        data = parser.parse_mapping("fields:\\n  name:\\n    type: string\\n")
        # {'fields': {'name': {'type': 'string'}}}
    """

    def __init__(self, preview_length: int = PREVIEW_LENGTH):
        """
        Initialize parser.

        Args:
            preview_length: Characters of buffer quoted in syntax errors
        """
        self.preview_length = preview_length
        self.logger = logging.getLogger(__name__)
        self.buffers_parsed = 0

    def parse(self, buffer: str) -> Any:
        """
        Parse buffer into a value tree.

        Args:
            buffer: YAML text

        Returns:
            Parsed value (mapping, sequence, scalar or None)

        Raises:
            YamlSyntaxError: If buffer is malformed
        """
        try:
            data = yaml.load(buffer, Loader=_LOADER)
        except yaml.YAMLError as e:
            raise self._wrap_error(e, buffer) from e

        self.buffers_parsed += 1
        return data

    def parse_mapping(self, buffer: str) -> dict[str, Any]:
        """
        Parse buffer that must hold a mapping at the top level.

        Args:
            buffer: YAML text

        Returns:
            Parsed mapping ({} for an empty document)

        Raises:
            YamlSyntaxError: If buffer is malformed or not a mapping
        """
        data = self.parse(buffer)

        if data is None:
            return {}

        if not isinstance(data, dict):
            raise YamlSyntaxError(
                f"YAML parsing failed: expected a mapping at the top level, "
                f"got {type(data).__name__}",
                preview=content_preview(buffer, self.preview_length)
            )

        return data

    def parse_section_value(self, buffer: str) -> Any:
        """
        Parse a one-section slice (header plus body) and return its value.

        The value is taken by position, not by name: headers such as
        'on', 'null' or '2024' do not stay strings once resolved.

        Args:
            buffer: Text of a single top-level section

        Returns:
            Section value (None for an empty body)

        Raises:
            YamlSyntaxError: If buffer is malformed or not a mapping
        """
        return next(iter(self.parse_mapping(buffer).values()), None)

    def _wrap_error(self, error: yaml.YAMLError, buffer: str) -> YamlSyntaxError:
        """Build a YamlSyntaxError from a PyYAML error."""
        line: Optional[int] = None
        column: Optional[int] = None

        mark = getattr(error, 'problem_mark', None)
        if mark is not None:
            line = mark.line + 1
            column = mark.column + 1

        problem = getattr(error, 'problem', None) or str(error)
        message = f"YAML parsing failed: {problem}"
        if line is not None:
            message += f" at line {line}, column {column}"

        self.logger.debug(message)

        return YamlSyntaxError(
            message,
            preview=content_preview(buffer, self.preview_length),
            line=line,
            column=column
        )


__all__ = ['SingleBufferParser', 'content_preview']
