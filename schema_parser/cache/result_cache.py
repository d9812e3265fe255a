# Path: schema_parser/cache/result_cache.py
"""
In-Memory Result Cache

Bounded map of content fingerprint to ParseResult.

Eviction is insertion-order truncation, not LRU: once the entry count
exceeds max_entries, only the retain_entries most recently inserted
entries survive. Reads do not refresh an entry's position, and
re-inserting an existing key keeps its original position.
"""

import gc
import logging
from itertools import islice
from typing import Optional

from ..constants import CACHE_MAX_ENTRIES, CACHE_RETAIN_ENTRIES
from ..models.result import ParseResult


class ResultCache:
    """
    Bounded result cache.

    Example:
        cache = ResultCache(max_entries=100, retain_entries=50)

        result = cache.get(key)
        if result is None:
            result = parse(content)
            cache.put(key, result)
    """

    def __init__(
        self,
        max_entries: int = CACHE_MAX_ENTRIES,
        retain_entries: int = CACHE_RETAIN_ENTRIES
    ):
        """
        Initialize result cache.

        Args:
            max_entries: Entry count that triggers pruning when exceeded
            retain_entries: Entries kept after pruning
        """
        if retain_entries > max_entries:
            raise ValueError("retain_entries must be <= max_entries")

        self.max_entries = max_entries
        self.retain_entries = retain_entries
        self.logger = logging.getLogger(__name__)

        self._entries: dict[str, ParseResult] = {}

        # Statistics
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def get(self, key: str) -> Optional[ParseResult]:
        """
        Get cached result.

        Args:
            key: Cache key

        Returns:
            ParseResult or None if not cached
        """
        result = self._entries.get(key)
        if result is None:
            self.misses += 1
            self.logger.debug(f"Cache miss: {key[:8]}")
            return None

        self.hits += 1
        self.logger.debug(f"Cache hit: {key[:8]}")
        return result

    def put(self, key: str, result: ParseResult) -> None:
        """
        Store result, pruning when the cache grows past capacity.

        Args:
            key: Cache key
            result: Parse result to store
        """
        self._entries[key] = result

        if len(self._entries) > self.max_entries:
            self._prune()

    def _prune(self) -> None:
        """Keep only the most recently inserted retain_entries entries."""
        before = len(self._entries)
        skip = before - self.retain_entries
        self._entries = dict(islice(self._entries.items(), skip, None))

        evicted = before - len(self._entries)
        self.evictions += evicted
        self.logger.info(f"Cache pruned: {evicted} entries evicted, {len(self._entries)} kept")

    def keys(self) -> list[str]:
        """Keys in insertion order."""
        return list(self._entries)

    def clear(self) -> None:
        """Drop every entry and hint the garbage collector."""
        count = len(self._entries)
        self._entries = {}
        gc.collect()
        self.logger.info(f"Cache cleared: {count} entries dropped")

    def get_stats(self) -> dict:
        """Get cache statistics."""
        total_requests = self.hits + self.misses
        hit_rate = self.hits / total_requests if total_requests > 0 else 0

        return {
            'entries': len(self._entries),
            'max_entries': self.max_entries,
            'retain_entries': self.retain_entries,
            'hits': self.hits,
            'misses': self.misses,
            'evictions': self.evictions,
            'hit_rate': hit_rate
        }

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ['ResultCache']
