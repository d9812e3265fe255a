# Path: schema_parser/validation/quick_validator.py
"""
Quick Structural Validator

Cheap sanity checks on raw YAML text. Nothing is parsed.

This module checks:
- Empty content (error)
- Tab characters on content lines
- Indentation width consistency (GCD of the observed widths)
- Control characters
- Presence of at least one top-level section

Example:
    from ..validation import QuickValidator

    report = QuickValidator().validate(content)

    for warning in report.warnings:
        print(warning)
"""

import logging
import re
from functools import reduce
from math import gcd

from ..constants import CONTROL_CHARACTER_PATTERN, MAX_RECOMMENDED_INDENT
from ..foundation.section_indexer import iter_lines, match_section_header
from ..models.result import ValidationReport
from ..validation.constants import (
    MSG_EMPTY_CONTENT,
    MSG_TABS,
    MSG_LARGE_INDENT,
    MSG_INCONSISTENT_INDENT,
    MSG_CONTROL_CHARACTERS,
    MSG_NO_SECTIONS,
    COMMENT_PREFIX,
)


_CONTROL_RE = re.compile(CONTROL_CHARACTER_PATTERN)


class QuickValidator:
    """Structural checks on raw YAML text."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def validate(self, text: str) -> ValidationReport:
        """
        Check text without parsing it.

        Args:
            text: Raw YAML text

        Returns:
            ValidationReport (empty content yields one error and no warnings)
        """
        report = ValidationReport()

        if not text.strip():
            report.errors.append(MSG_EMPTY_CONTENT)
            return report

        report.warnings.extend(self._check_lines(text))

        if _CONTROL_RE.search(text):
            report.warnings.append(MSG_CONTROL_CHARACTERS)

        if not self._has_sections(text):
            report.warnings.append(MSG_NO_SECTIONS)

        self.logger.debug(
            f"Quick validation: {len(report.errors)} errors, {len(report.warnings)} warnings"
        )
        return report

    def _check_lines(self, text: str) -> list[str]:
        """Tab and indentation checks over content lines."""
        warnings = []
        widths: set[int] = set()

        for line_number, line in enumerate(iter_lines(text), start=1):
            stripped = line.strip()
            if not stripped or stripped.startswith(COMMENT_PREFIX):
                continue

            indent = len(line) - len(line.lstrip())
            if indent > 0:
                widths.add(indent)

            if '\t' in line:
                warnings.append(MSG_TABS.format(line=line_number))

        if widths:
            common = reduce(gcd, widths)
            if common > MAX_RECOMMENDED_INDENT:
                warnings.append(MSG_LARGE_INDENT.format(gcd=common))
            elif common == 1 and len(widths) > 1:
                warnings.append(MSG_INCONSISTENT_INDENT)

        return warnings

    def _has_sections(self, text: str) -> bool:
        return any(match_section_header(line) is not None for line in iter_lines(text))


__all__ = ['QuickValidator']
