# Path: schema_parser/observability/metrics.py
"""
Performance Metrics Collection

Counters describing engine activity and the rates derived from them.

Each engine owns one PerformanceMetrics instance; nothing here is
process-global, so independent engines never see each other's counts.

Example:
    metrics = PerformanceMetrics()

    metrics.record_parse()
    metrics.record_cache_miss()
    metrics.record_lazy_load()
    metrics.add_memory_saved(750_000)

    snapshot = metrics.snapshot()
    # {'total_parses': 1, ..., 'lazy_load_rate': 100.0}

    metrics.reset()
"""

import logging
from dataclasses import dataclass, field, fields
from typing import Any, Optional

from .constants import (
    METRIC_TOTAL_PARSES,
    METRIC_CACHE_HITS,
    METRIC_CACHE_MISSES,
    METRIC_LAZY_LOADS,
    METRIC_STREAMING_PARSES,
    METRIC_MEMORY_SAVED,
    METRIC_TIME_SAVED,
    RATE_PRECISION,
)


def _rate(part: float, total: float) -> float:
    """Percentage of part in total, 0.0 when total is zero."""
    if total <= 0:
        return 0.0
    return round((part / total) * 100.0, RATE_PRECISION)


@dataclass
class PerformanceMetrics:
    """
    Mutable counter set for one engine.

    Attributes:
        total_parses: parse_content calls
        cache_hits: Calls served from the result cache
        cache_misses: Calls that had to parse
        lazy_loads: Calls handled by the lazy strategy
        streaming_parses: Calls handled by the streaming strategy
        memory_saved_bytes: Approximate bytes not materialized
        time_saved_ms: Time spent on section-only parses
    """
    total_parses: int = 0
    cache_hits: int = 0
    cache_misses: int = 0
    lazy_loads: int = 0
    streaming_parses: int = 0
    memory_saved_bytes: int = 0
    time_saved_ms: float = 0.0
    logger: logging.Logger = field(
        default_factory=lambda: logging.getLogger(__name__),
        repr=False,
        compare=False
    )

    def record_parse(self) -> None:
        self.total_parses += 1

    def record_cache_hit(self) -> None:
        self.cache_hits += 1

    def record_cache_miss(self) -> None:
        self.cache_misses += 1

    def record_lazy_load(self) -> None:
        self.lazy_loads += 1

    def record_streaming_parse(self) -> None:
        self.streaming_parses += 1

    def add_memory_saved(self, amount: int) -> None:
        """Accumulate bytes a non-full parse avoided materializing."""
        if amount > 0:
            self.memory_saved_bytes += int(amount)

    def add_time_saved(self, milliseconds: float) -> None:
        """Accumulate time spent on section-only parses."""
        if milliseconds > 0:
            self.time_saved_ms += milliseconds

    @property
    def cache_hit_rate(self) -> float:
        return _rate(self.cache_hits, self.total_parses)

    @property
    def lazy_load_rate(self) -> float:
        return _rate(self.lazy_loads, self.total_parses)

    @property
    def streaming_rate(self) -> float:
        return _rate(self.streaming_parses, self.total_parses)

    def counters(self) -> dict[str, Any]:
        """Raw counter values."""
        return {
            METRIC_TOTAL_PARSES: self.total_parses,
            METRIC_CACHE_HITS: self.cache_hits,
            METRIC_CACHE_MISSES: self.cache_misses,
            METRIC_LAZY_LOADS: self.lazy_loads,
            METRIC_STREAMING_PARSES: self.streaming_parses,
            METRIC_MEMORY_SAVED: self.memory_saved_bytes,
            METRIC_TIME_SAVED: self.time_saved_ms,
        }

    def snapshot(self, extra: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Counters plus derived rates.

        Args:
            extra: Additional entries merged into the snapshot

        Returns:
            Dictionary snapshot (a copy; later activity does not change it)
        """
        snapshot = self.counters()
        snapshot['cache_hit_rate'] = self.cache_hit_rate
        snapshot['lazy_load_rate'] = self.lazy_load_rate
        snapshot['streaming_rate'] = self.streaming_rate
        if extra:
            snapshot.update(extra)
        return snapshot

    def reset(self) -> None:
        """Zero every counter."""
        for metric_field in fields(self):
            if metric_field.name == 'logger':
                continue
            setattr(self, metric_field.name, metric_field.default)

        self.logger.debug("Metrics reset")


__all__ = ['PerformanceMetrics']
