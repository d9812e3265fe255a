# Path: schema_parser/tests/unit/test_quick_validator.py
"""
Unit Tests for QuickValidator

Tests each structural check and its exact message.
"""

from schema_parser.validation.quick_validator import QuickValidator


class TestEmptyContent:
    """Test the empty content error."""

    def test_empty_string(self):
        report = QuickValidator().validate("")

        assert report.errors == ['YAML content is empty']
        assert report.warnings == []
        assert not report.is_valid

    def test_whitespace_only(self):
        report = QuickValidator().validate("   \n\n\t\n")

        assert report.errors == ['YAML content is empty']
        assert report.warnings == []


class TestLineChecks:
    """Test tab and indentation checks."""

    def test_clean_document(self, sample_yaml):
        report = QuickValidator().validate(sample_yaml)

        assert report.is_valid
        assert report.warnings == []

    def test_tab_reports_line_number(self):
        report = QuickValidator().validate("core:\n\tname: users\n")

        assert report.warnings == [
            'Line 2 contains tabs - use spaces for YAML indentation'
        ]

    def test_large_indentation(self):
        report = QuickValidator().validate("core:\n        name: users\n")

        assert report.warnings == [
            'Large indentation detected (8 spaces) - consider using 2 or 4 spaces'
        ]

    def test_inconsistent_indentation(self):
        report = QuickValidator().validate("core:\n  a:\n     b: 1\n")

        assert report.warnings == [
            'Inconsistent indentation detected - use consistent spacing (2 or 4 spaces)'
        ]

    def test_comments_and_blank_lines_ignored(self):
        report = QuickValidator().validate("core:\n #\tnote\n\n  a: 1\n")

        assert report.warnings == []


class TestDocumentChecks:
    """Test whole-document checks."""

    def test_control_characters(self):
        report = QuickValidator().validate("core:\n  name: a\x01b\n")

        assert report.warnings == [
            'YAML contains control characters that may cause parsing issues'
        ]

    def test_no_sections(self):
        report = QuickValidator().validate("name: users\n")

        assert report.warnings == ['No main sections found in YAML']

    def test_to_dict(self):
        report = QuickValidator().validate("name: users\n")

        assert report.to_dict() == {
            'errors': [],
            'warnings': ['No main sections found in YAML'],
        }
