# Path: schema_parser/tests/conftest.py
"""
Pytest Configuration and Shared Fixtures for schema_parser

Provides sample documents, engines with small thresholds, event logger
mocks and controllable memory ceilings.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional
from unittest.mock import MagicMock, patch

import pytest

from schema_parser.config_loader import ConfigLoader
from schema_parser.engine import ParsingEngine
from schema_parser.models.config import EngineConfig
from schema_parser.observability.event_logger import ParseEventLogger


# ==============================================================================
# SAMPLE DOCUMENTS
# ==============================================================================

SAMPLE_YAML = (
    "core:\n"
    "  name: users\n"
    "  table: users\n"
    "fields:\n"
    "  name:\n"
    "    type: string\n"
    "  email:\n"
    "    type: string\n"
    "relations:\n"
    "  posts:\n"
    "    type: hasMany\n"
)

# 'fields' holds a nested mapping on a line that already has a value
MALFORMED_FIELDS_YAML = (
    "core:\n"
    "  name: users\n"
    "fields:\n"
    "  name: type: string\n"
    "relations:\n"
    "  posts:\n"
    "    type: hasMany\n"
)


@pytest.fixture
def sample_yaml():
    """Three-section schema document (132 characters)."""
    return SAMPLE_YAML


@pytest.fixture
def malformed_yaml():
    """Document whose 'fields' section is malformed."""
    return MALFORMED_FIELDS_YAML


@pytest.fixture
def large_malformed_yaml():
    """Malformed 'fields' section followed by a long well-formed section."""
    relations = "".join(
        f"  rel_{i}:\n    type: hasMany\n" for i in range(30)
    )
    return (
        "core:\n"
        "  name: users\n"
        "fields:\n"
        "  name: type: string\n"
        "relations:\n"
        f"{relations}"
    )


@pytest.fixture
def two_megabyte_yaml():
    """Document between 1MB and 5MB with a small 'core' section up front."""
    items = "".join(f"  item_{i:07d}: value_{i:07d}\n" for i in range(70000))
    return "core:\n  name: big\n  version: 3\nitems:\n" + items


# ==============================================================================
# CONFIGURATION FIXTURES
# ==============================================================================

@pytest.fixture
def small_config():
    """Thresholds small enough to reach every strategy with tiny documents."""
    return EngineConfig(
        large_threshold_bytes=100,
        streaming_threshold_bytes=400,
        chunk_size_bytes=50
    )


@pytest.fixture
def mock_env_vars():
    """Provide mock environment variables for testing."""
    env_vars = {
        'SCHEMA_PARSER_ENVIRONMENT': 'test',
        'SCHEMA_PARSER_DEBUG': 'true',
        'SCHEMA_PARSER_LARGE_THRESHOLD_BYTES': '2048',
        'SCHEMA_PARSER_STREAMING_THRESHOLD_BYTES': '8192',
        'SCHEMA_PARSER_DEFAULT_SECTIONS': 'core,fields',
        'SCHEMA_PARSER_MEMORY_MULTIPLIER': '2.5',
        'SCHEMA_PARSER_FAIL_ON_MEMORY_UNAVAILABLE': 'false',
        'SCHEMA_PARSER_LOG_CONSOLE': 'false',
    }

    with patch.dict(os.environ, env_vars, clear=False):
        yield env_vars


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset the ConfigLoader singleton between tests."""
    ConfigLoader.reset()
    yield
    ConfigLoader.reset()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def restore_root_logging():
    """Put the root logger's handlers and level back after the test."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield root_logger
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


# ==============================================================================
# COLLABORATOR FIXTURES
# ==============================================================================

@pytest.fixture
def mock_events():
    """Event logger mock that records every call."""
    return MagicMock(spec=ParseEventLogger)


class RecordingCeiling:
    """Memory ceiling under test control; remembers every set() call."""

    def __init__(self, limit: Optional[int], usage: int, widenable: bool = True):
        self.limit = limit
        self.usage_bytes = usage
        self.widenable = widenable
        self.set_calls = []

    def get(self):
        return self.limit

    def set(self, limit):
        self.set_calls.append(limit)
        if limit != self.limit and not self.widenable:
            return False
        self.limit = limit
        return True

    def usage(self):
        return self.usage_bytes


@pytest.fixture
def make_ceiling():
    """Factory for RecordingCeiling instances."""
    return RecordingCeiling


@pytest.fixture
def engine():
    """Engine with default configuration."""
    return ParsingEngine()


@pytest.fixture
def small_engine(small_config, make_ceiling):
    """Engine with small thresholds and a roomy memory ceiling."""
    return ParsingEngine(
        config=small_config,
        memory_ceiling=make_ceiling(limit=10 ** 12, usage=0)
    )
