# Path: schema_parser/engine.py
"""
Adaptive YAML Parsing Engine

Public entry point of schema_parser. Picks a parsing strategy from the
document size, caches results by content fingerprint, and keeps
per-engine performance counters.

Strategies:
- standard: whole document in one buffer (up to 1MB)
- lazy: only the requested top-level sections (1MB - 5MB)
- streaming: section-at-a-time scan that skips broken sections (over 5MB)

Example:
    from schema_parser import ParsingEngine

    engine = ParsingEngine()

    result = engine.parse_content(content)
    fields = engine.parse_section(content, 'fields')
    report = engine.quick_validate(content)

    print(engine.get_performance_metrics())
"""

import logging
import time
from dataclasses import replace
from pathlib import Path
from typing import Any, Iterable, Optional

from .cache.persistent_cache import PersistentCache, SQLitePersistentCache
from .cache.result_cache import ResultCache
from .config_loader import ConfigLoader
from .constants import WILDCARD_SECTION
from .foundation.fingerprint import cache_key, content_fingerprint
from .foundation.yaml_parser import SingleBufferParser, content_preview
from .lazy.lazy_parser import LazySectionParser
from .models.config import EngineConfig
from .models.result import ParseResult, ValidationReport
from .observability.constants import (
    OPERATION_PARSE_CONTENT,
    OPERATION_PARSING_PERFORMANCE,
    OPERATION_SECTION_PARSE,
    OPERATION_QUICK_VALIDATE,
)
from .observability.event_logger import ParseEventLogger
from .observability.metrics import PerformanceMetrics
from .parser_modes import ParsingStrategy, get_strategy_config, select_strategy
from .streaming.memory_manager import MemoryCeiling, MemoryManager, MemoryNegotiator
from .streaming.stream_parser import StreamingLineParser
from .validation.quick_validator import QuickValidator


class ParsingEngine:
    """
    Size-adaptive YAML parser with a result cache and metrics.

    One engine is meant to be used from one thread at a time. Cached
    results are shared between calls and must be treated as read-only.
    """

    _logging_configured = False  # Class-level flag to configure logging once

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        persistent_cache: Optional[PersistentCache] = None,
        memory_ceiling: Optional[MemoryCeiling] = None,
        event_logger: Optional[ParseEventLogger] = None
    ):
        """
        Initialize engine.

        Args:
            config: Engine configuration (defaults to EngineConfig())
            persistent_cache: Optional second-tier cache reported in metrics
            memory_ceiling: Memory limit negotiated by full chunked parses
                (defaults to the process RLIMIT_AS)
            event_logger: Structured event sink
        """
        self.config = config or EngineConfig()
        self.logger = logging.getLogger(__name__)

        self.events = event_logger or ParseEventLogger(
            enabled=self.config.enable_event_logging
        )
        self.metrics = PerformanceMetrics()
        self.cache = ResultCache(
            max_entries=self.config.cache_max_entries,
            retain_entries=self.config.cache_retain_entries
        )
        self.persistent_cache = persistent_cache
        self.memory_manager = MemoryManager()

        self.buffer_parser = SingleBufferParser(preview_length=self.config.preview_length)
        self.negotiator = MemoryNegotiator(
            ceiling=memory_ceiling,
            multiplier=self.config.memory_multiplier,
            margin_bytes=self.config.memory_margin_bytes,
            raise_on_failure=self.config.fail_on_memory_unavailable
        )
        self.lazy_parser = LazySectionParser(
            buffer_parser=self.buffer_parser,
            negotiator=self.negotiator,
            metrics=self.metrics,
            chunk_size_bytes=self.config.chunk_size_bytes,
            event_logger=self.events
        )
        self.streaming_parser = StreamingLineParser(
            buffer_parser=self.buffer_parser,
            gc_interval_lines=self.config.gc_interval_lines,
            gc_generation=self.config.gc_generation,
            event_logger=self.events,
            memory_manager=self.memory_manager
        )
        self.validator = QuickValidator()

        self.logger.debug(
            f"ParsingEngine initialized (lazy > {self.config.large_threshold_bytes}, "
            f"streaming > {self.config.streaming_threshold_bytes})"
        )

    @classmethod
    def from_environment(cls, loader: Optional[ConfigLoader] = None) -> 'ParsingEngine':
        """
        Build an engine from .env / SCHEMA_PARSER_* settings.

        Configures logging on first use and opens the persistent cache
        when a cache directory is configured.
        """
        loader = loader or ConfigLoader()

        if not ParsingEngine._logging_configured:
            cls._configure_logging(loader)
            ParsingEngine._logging_configured = True

        persistent_cache = None
        cache_dir = loader.get('persistent_cache_dir')
        if cache_dir:
            persistent_cache = SQLitePersistentCache(
                Path(cache_dir),
                max_size_mb=loader.get('persistent_cache_max_mb'),
                enabled=loader.get('persistent_cache_enabled', True)
            )

        return cls(config=EngineConfig.from_loader(loader), persistent_cache=persistent_cache)

    @staticmethod
    def _configure_logging(loader: ConfigLoader) -> None:
        """Configure logging with file handlers."""
        from .logger.engine_logging import setup_logging

        log_level = 'DEBUG' if loader.get('debug') else loader.get('log_level', 'INFO')

        setup_logging(
            log_dir=loader.get('log_dir'),
            log_level=log_level,
            console_output=loader.get('log_console', True),
            main_log=loader.get('main_log'),
            events_log=loader.get('events_log')
        )

    # ==========================================================================
    # PARSING
    # ==========================================================================

    def parse_content(self, text: str, sections: Optional[Iterable[str]] = None) -> ParseResult:
        """
        Parse YAML text with the strategy its size calls for.

        Args:
            text: Raw YAML text
            sections: Sections to parse when the lazy strategy applies
                (defaults to the configured default sections; '*' means all)

        Returns:
            ParseResult

        Raises:
            YamlSyntaxError: If the document (or a requested section) is
                malformed outside the streaming strategy
            MemoryLimitUnavailableError: If a full chunked parse cannot
                reserve memory
        """
        self.metrics.record_parse()
        size = len(text)
        if isinstance(sections, str):
            sections = [sections]
        requested = list(sections) if sections else None

        self.events.log_operation_start(
            OPERATION_PARSE_CONTENT,
            content_size=size,
            sections=requested
        )

        start_time = time.perf_counter()
        start_memory = self.memory_manager.take_snapshot()

        strategy = select_strategy(
            size,
            large_threshold=self.config.large_threshold_bytes,
            streaming_threshold=self.config.streaming_threshold_bytes
        )
        selection = None
        if get_strategy_config(strategy).honours_section_selection:
            selection = self._section_selection(requested)

        fingerprint = content_fingerprint(text)
        key = cache_key(fingerprint, selection)

        cached = self.cache.get(key)
        if cached is not None:
            self.metrics.record_cache_hit()
            result = replace(cached, from_cache=True)
        else:
            self.metrics.record_cache_miss()
            try:
                data = self._run_strategy(strategy, text, selection)
            except Exception as e:
                # log_error also closes the parse_content operation
                self.events.log_error(
                    "YAML parsing failed",
                    exception=e,
                    context={
                        'content_preview': content_preview(text, self.config.preview_length),
                        'strategy': strategy.value,
                    }
                )
                raise

            result = ParseResult(
                data=data,
                strategy=strategy,
                content_size=size,
                fingerprint=fingerprint
            )
            self.cache.put(key, result)

        execution_time_ms = (time.perf_counter() - start_time) * 1000
        memory_used = self.memory_manager.take_snapshot().rss_bytes - start_memory.rss_bytes

        self.events.log_performance(OPERATION_PARSING_PERFORMANCE, {
            'execution_time_ms': execution_time_ms,
            'memory_used_bytes': memory_used,
            'content_size': size,
            'strategy_used': result.strategy.value,
            'cache_hit': result.from_cache,
        })
        self.events.log_operation_end(OPERATION_PARSE_CONTENT, {
            'success': True,
            'execution_time_ms': execution_time_ms,
            'memory_used_bytes': memory_used,
            'strategy': result.strategy.value,
        })

        return result

    def _section_selection(self, requested: Optional[list[str]]) -> list[str]:
        """Normalized lazy selection: defaults applied, '*' alone when present."""
        selection = requested or list(self.config.default_sections)
        if WILDCARD_SECTION in selection:
            return [WILDCARD_SECTION]
        return sorted(set(selection))

    def _run_strategy(
        self,
        strategy: ParsingStrategy,
        text: str,
        selection: Optional[list[str]]
    ) -> dict[str, Any]:
        if strategy == ParsingStrategy.STREAMING:
            self.metrics.record_streaming_parse()
            self.logger.info(f"Streaming parse of {len(text)} characters")
            return self.streaming_parser.parse(text)

        if strategy == ParsingStrategy.LAZY:
            self.metrics.record_lazy_load()
            self.logger.info(f"Lazy parse of {len(text)} characters, sections={selection}")
            return self.lazy_parser.parse(text, selection)

        return self.buffer_parser.parse_mapping(text)

    def parse_section(self, text: str, section_name: str) -> Any:
        """
        Parse a single top-level section, bypassing the result cache.

        Args:
            text: Raw YAML text
            section_name: Top-level section to parse

        Returns:
            The section's value ({} when the section body is empty)

        Raises:
            SectionNotFoundError: If text has no such section
            YamlSyntaxError: If the section is malformed
        """
        start_time = time.perf_counter()

        section_text = self.lazy_parser.extract(text, section_name)
        value = self.buffer_parser.parse_section_value(section_text)

        execution_time_ms = (time.perf_counter() - start_time) * 1000
        self.metrics.add_time_saved(execution_time_ms)

        self.events.log_performance(OPERATION_SECTION_PARSE, {
            'section_name': section_name,
            'execution_time_ms': execution_time_ms,
            'content_size': len(text),
            'section_size': len(section_text),
        })

        return {} if value is None else value

    def quick_validate(self, text: str) -> ValidationReport:
        """
        Structural sanity check without parsing.

        Returns:
            ValidationReport with errors and warnings
        """
        report = self.validator.validate(text)
        self.events.log_debug(
            f"Completed {OPERATION_QUICK_VALIDATE}",
            content_size=len(text),
            errors=len(report.errors),
            warnings=len(report.warnings)
        )
        return report

    # ==========================================================================
    # METRICS & CACHE
    # ==========================================================================

    def get_performance_metrics(self) -> dict[str, Any]:
        """
        Counters, derived rates and cache state.

        Returns:
            Snapshot dictionary (later activity does not change it)
        """
        if self.persistent_cache is not None:
            persistent_enabled = self.persistent_cache.is_enabled()
            persistent_stats = self.persistent_cache.get_stats()
        else:
            persistent_enabled = False
            persistent_stats = {}

        return self.metrics.snapshot(extra={
            'persistent_cache_enabled': persistent_enabled,
            'persistent_cache_stats': persistent_stats,
            'cache_entries': len(self.cache),
        })

    def reset_metrics(self) -> None:
        """Zero every counter."""
        self.metrics.reset()
        self.logger.info("Performance metrics reset")

    def clear_cache(self) -> None:
        """Drop every cached result."""
        self.cache.clear()


__all__ = ['ParsingEngine']
