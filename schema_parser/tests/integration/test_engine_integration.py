# Path: schema_parser/tests/integration/test_engine_integration.py
"""
Integration Tests for ParsingEngine

Tests the full engine with real collaborators:
- Cache idempotence and metrics
- Strategy selection by size
- Section-only parsing
- Streaming failure isolation
- Memory negotiation failures
- Event sequence
- Environment-driven construction
"""

import os
from unittest.mock import patch

import pytest

from schema_parser import ParsingEngine
from schema_parser.cache.persistent_cache import SQLitePersistentCache
from schema_parser.models.config import EngineConfig
from schema_parser.models.error import (
    MemoryLimitUnavailableError,
    SectionNotFoundError,
    YamlSyntaxError,
)
from schema_parser.observability.event_logger import ParseEventLogger
from schema_parser.parser_modes import ParsingStrategy
from schema_parser.streaming.memory_manager import FixedMemoryCeiling


class TestParseContentCaching:
    """Test idempotence and cache metrics."""

    def test_second_parse_is_cache_hit(self, engine, sample_yaml):
        first = engine.parse_content(sample_yaml)
        second = engine.parse_content(sample_yaml)

        assert first == second
        assert not first.from_cache
        assert second.from_cache

        metrics = engine.get_performance_metrics()
        assert metrics['total_parses'] == 2
        assert metrics['cache_hits'] == 1
        assert metrics['cache_misses'] == 1
        assert metrics['cache_hit_rate'] == 50.0

    def test_cache_capacity(self, engine):
        """The 101st distinct document truncates the cache to 50 entries."""
        for i in range(101):
            engine.parse_content(f"core:\n  id: {i}\n")

        assert engine.get_performance_metrics()['cache_entries'] == 50

    def test_clear_cache(self, engine, sample_yaml):
        engine.parse_content(sample_yaml)

        engine.clear_cache()

        assert engine.get_performance_metrics()['cache_entries'] == 0
        assert not engine.parse_content(sample_yaml).from_cache

    def test_reset_metrics(self, engine, sample_yaml):
        engine.parse_content(sample_yaml)
        engine.parse_content(sample_yaml)

        engine.reset_metrics()

        metrics = engine.get_performance_metrics()
        for name in ('total_parses', 'cache_hits', 'cache_misses',
                     'lazy_loads', 'streaming_parses'):
            assert metrics[name] == 0

    def test_engines_do_not_share_metrics(self, sample_yaml):
        first = ParsingEngine()
        second = ParsingEngine()

        first.parse_content(sample_yaml)

        assert second.get_performance_metrics()['total_parses'] == 0


class TestStrategySelection:
    """Test strategy by document size."""

    def test_standard_below_large_threshold(self, small_engine):
        result = small_engine.parse_content("core:\n  name: users\n")

        assert result.strategy == ParsingStrategy.STANDARD
        assert result == {'core': {'name': 'users'}}

    def test_lazy_defaults_to_core(self, small_engine, sample_yaml):
        result = small_engine.parse_content(sample_yaml)

        assert result.strategy == ParsingStrategy.LAZY
        assert result == {'core': {'name': 'users', 'table': 'users'}}
        assert small_engine.get_performance_metrics()['lazy_loads'] == 1

    def test_lazy_selection_is_part_of_cache_key(self, small_engine, sample_yaml):
        core_only = small_engine.parse_content(sample_yaml, sections=['core'])
        fields_only = small_engine.parse_content(sample_yaml, sections=['fields'])
        again = small_engine.parse_content(sample_yaml, sections=['core'])

        assert list(core_only) == ['core']
        assert list(fields_only) == ['fields']
        assert again.from_cache

    def test_lazy_wildcard_parses_everything(self, small_engine, sample_yaml):
        result = small_engine.parse_content(sample_yaml, sections=['*'])

        assert set(result) == {'core', 'fields', 'relations'}

    def test_streaming_above_streaming_threshold(self, small_engine, large_malformed_yaml):
        result = small_engine.parse_content(large_malformed_yaml)

        assert result.strategy == ParsingStrategy.STREAMING
        assert small_engine.get_performance_metrics()['streaming_parses'] == 1

    def test_two_megabyte_document_with_core_selection(self, engine, two_megabyte_yaml):
        """A 1-5MB document only materializes the selected section."""
        assert 1024 * 1024 < len(two_megabyte_yaml) < 5 * 1024 * 1024

        result = engine.parse_content(two_megabyte_yaml, sections=['core'])

        assert result.strategy == ParsingStrategy.LAZY
        assert result == {'core': {'name': 'big', 'version': 3}}
        assert engine.get_performance_metrics()['memory_saved_bytes'] > 0


class TestStreamingFailures:
    """Test section-local failure isolation through the engine."""

    def test_malformed_section_absent(self, small_engine, large_malformed_yaml):
        result = small_engine.parse_content(large_malformed_yaml)

        assert 'fields' not in result
        assert result['core'] == {'name': 'users'}
        assert len(result['relations']) == 30

    def test_standard_strategy_raises(self, malformed_yaml, mock_events):
        engine = ParsingEngine(event_logger=mock_events)

        with pytest.raises(YamlSyntaxError):
            engine.parse_content(malformed_yaml)

        mock_events.log_error.assert_called_once()
        context = mock_events.log_error.call_args.kwargs['context']
        assert context['content_preview'] == malformed_yaml[:100]
        assert engine.get_performance_metrics()['total_parses'] == 1


class TestMemoryNegotiation:
    """Test full chunked parses that cannot reserve memory."""

    @pytest.fixture
    def starved_config(self):
        return dict(
            large_threshold_bytes=100,
            streaming_threshold_bytes=10_000,
            chunk_size_bytes=10
        )

    def test_raises_by_default(self, starved_config, sample_yaml):
        engine = ParsingEngine(
            config=EngineConfig(**starved_config),
            memory_ceiling=FixedMemoryCeiling(limit=1, usage_bytes=1)
        )

        with pytest.raises(MemoryLimitUnavailableError):
            engine.parse_content(sample_yaml, sections=['*'])

    def test_legacy_mode_returns_empty(self, starved_config, sample_yaml):
        engine = ParsingEngine(
            config=EngineConfig(fail_on_memory_unavailable=False, **starved_config),
            memory_ceiling=FixedMemoryCeiling(limit=1, usage_bytes=1)
        )

        result = engine.parse_content(sample_yaml, sections=['*'])

        assert len(result) == 0


class TestParseSection:
    """Test section-only parsing."""

    def test_fields_example(self, engine):
        content = "fields:\n  name:\n    type: string\n"

        assert engine.parse_section(content, 'fields') == {'name': {'type': 'string'}}

    def test_missing_section(self, engine, sample_yaml):
        with pytest.raises(SectionNotFoundError) as exc_info:
            engine.parse_section(sample_yaml, 'missing')

        assert str(exc_info.value) == "Section 'missing' not found in YAML content"

    def test_empty_section_is_empty_mapping(self, engine):
        assert engine.parse_section("core:\nfields:\n  a: 1\n", 'core') == {}

    def test_boolean_like_section(self, engine):
        assert engine.parse_section("on:\n  push: 1\n", 'on') == {'push': 1}

    def test_year_section(self, engine):
        assert engine.parse_section("2024:\n  rows: 3\n", '2024') == {'rows': 3}

    def test_null_like_section(self, engine):
        content = "core:\n  a: 1\nnull:\n  b: 2\n"

        assert engine.parse_section(content, 'null') == {'b': 2}

    def test_bypasses_cache(self, engine, sample_yaml):
        engine.parse_section(sample_yaml, 'core')

        metrics = engine.get_performance_metrics()
        assert metrics['cache_entries'] == 0
        assert metrics['total_parses'] == 0
        assert metrics['time_saved_ms'] >= 0.0

    def test_performance_event(self, sample_yaml, mock_events):
        engine = ParsingEngine(event_logger=mock_events)

        engine.parse_section(sample_yaml, 'fields')

        operation, payload = mock_events.log_performance.call_args.args
        assert operation == 'section_only_parse'
        assert payload['section_name'] == 'fields'
        assert payload['content_size'] == len(sample_yaml)
        assert payload['section_size'] < len(sample_yaml)


class TestUnexpectedFailures:
    """Test errors raised outside the parser error hierarchy."""

    def test_unexpected_error_closes_operation(self, sample_yaml):
        """Failures outside the parse errors still close parse_content."""
        engine = ParsingEngine(event_logger=ParseEventLogger(enabled=True))

        with patch.object(
            engine.buffer_parser, 'parse_mapping', side_effect=RuntimeError("boom")
        ):
            with pytest.raises(RuntimeError):
                engine.parse_content(sample_yaml)

        assert engine.events.current_operation() is None

        result = engine.parse_content(sample_yaml)

        assert result['core'] == {'name': 'users', 'table': 'users'}
        assert engine.events.current_operation() is None

    def test_unexpected_error_logged_and_propagated(self, sample_yaml, mock_events):
        engine = ParsingEngine(event_logger=mock_events)

        with patch.object(engine, '_run_strategy', side_effect=KeyError('broken')):
            with pytest.raises(KeyError):
                engine.parse_content(sample_yaml)

        mock_events.log_error.assert_called_once()
        mock_events.log_operation_end.assert_not_called()


class TestQuickValidate:
    """Test validation through the engine."""

    def test_empty_content(self, engine):
        report = engine.quick_validate("")

        assert any('empty' in error for error in report.errors)
        assert report.warnings == []

    def test_tab_line_number(self, engine):
        report = engine.quick_validate("core:\n  name: users\n\ttable: users\n")

        assert any('Line 3' in warning for warning in report.warnings)


class TestEvents:
    """Test the event sequence of parse_content."""

    def test_success_sequence(self, sample_yaml, mock_events):
        engine = ParsingEngine(event_logger=mock_events)

        engine.parse_content(sample_yaml)

        names = [name for name, _args, _kwargs in mock_events.method_calls]
        assert names == ['log_operation_start', 'log_performance', 'log_operation_end']

    def test_performance_payload(self, sample_yaml, mock_events):
        engine = ParsingEngine(event_logger=mock_events)

        engine.parse_content(sample_yaml)
        engine.parse_content(sample_yaml)

        operation, payload = mock_events.log_performance.call_args.args
        assert operation == 'yaml_parsing'
        assert payload['cache_hit'] is True
        assert payload['strategy_used'] == 'standard'
        assert payload['content_size'] == len(sample_yaml)
        assert 'execution_time_ms' in payload
        assert 'memory_used_bytes' in payload


class TestPersistentCacheReporting:
    """Test persistent cache fields in the metrics snapshot."""

    def test_without_persistent_cache(self, engine):
        metrics = engine.get_performance_metrics()

        assert metrics['persistent_cache_enabled'] is False
        assert metrics['persistent_cache_stats'] == {}

    def test_with_persistent_cache(self, temp_dir):
        engine = ParsingEngine(persistent_cache=SQLitePersistentCache(temp_dir))

        metrics = engine.get_performance_metrics()

        assert metrics['persistent_cache_enabled'] is True
        assert metrics['persistent_cache_stats']['entries'] == 0


class TestFromEnvironment:
    """Test environment-driven construction."""

    def test_builds_from_env(self, mock_env_vars, temp_dir):
        env = {'SCHEMA_PARSER_PERSISTENT_CACHE_DIR': str(temp_dir)}

        with patch.dict(os.environ, env), \
                patch.object(ParsingEngine, '_logging_configured', True):
            engine = ParsingEngine.from_environment()

        assert engine.config.large_threshold_bytes == 2048
        assert engine.config.default_sections == ('core', 'fields')
        assert isinstance(engine.persistent_cache, SQLitePersistentCache)
        assert engine.get_performance_metrics()['persistent_cache_enabled'] is True

    def test_configures_logging_once(self, mock_env_vars, temp_dir, restore_root_logging):
        env = {'SCHEMA_PARSER_LOG_DIR': str(temp_dir / 'logs')}

        with patch.dict(os.environ, env), \
                patch.object(ParsingEngine, '_logging_configured', False):
            ParsingEngine.from_environment()

            assert ParsingEngine._logging_configured is True
            assert (temp_dir / 'logs' / 'full_activity.log').exists()
