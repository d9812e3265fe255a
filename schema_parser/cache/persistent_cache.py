# Path: schema_parser/cache/persistent_cache.py
"""
SQLite-Based Persistent Result Cache

Second-tier, longer-lived store for parsed documents, shared across
processes and runs. The engine does not read or write it; it only reports
whether it is enabled and its statistics in the metrics snapshot.
Hosts decide when to store and reuse entries.

Features:
- Lookups by content fingerprint
- Size-based eviction (least recently accessed first)
- Access statistics
- Enable/disable switch
"""

from pathlib import Path
from typing import Any, Optional, Protocol
from datetime import datetime
import json
import sqlite3
import logging

from ..foundation.fingerprint import content_fingerprint


class PersistentCache(Protocol):
    """What the engine needs from a persistent cache collaborator."""

    def is_enabled(self) -> bool:
        ...

    def get_stats(self) -> dict:
        ...


class SQLitePersistentCache:
    """
    SQLite-based persistent result cache.

    Example:
        cache = SQLitePersistentCache(cache_dir)

        data = cache.get(content)
        if data is None:
            data = engine.parse_content(content).to_dict()
            cache.put(content, data)
    """

    def __init__(self, cache_dir: Path, max_size_mb: int = 256, enabled: bool = True):
        """
        Initialize persistent cache.

        Args:
            cache_dir: Directory for cache database
            max_size_mb: Maximum cache size in MB (default: 256)
            enabled: Start enabled
        """
        self.cache_dir = Path(cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.db_path = self.cache_dir / "result_cache.db"
        self.max_size_mb = max_size_mb
        self.enabled = enabled
        self.logger = logging.getLogger(__name__)

        # Initialize database
        self._init_db()

        # Statistics
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(str(self.db_path))

    def _init_db(self):
        """Initialize database schema."""
        conn = self._connect()

        conn.execute("""
            CREATE TABLE IF NOT EXISTS result_cache (
                cache_key TEXT PRIMARY KEY,
                data TEXT NOT NULL,
                content_size INTEGER NOT NULL,
                stored_at TIMESTAMP NOT NULL,
                last_accessed TIMESTAMP NOT NULL,
                access_count INTEGER DEFAULT 1,
                size_bytes INTEGER NOT NULL
            )
        """)

        conn.execute(
            "CREATE INDEX IF NOT EXISTS idx_last_accessed ON result_cache(last_accessed)"
        )

        conn.commit()
        conn.close()

    def is_enabled(self) -> bool:
        return self.enabled

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False

    def get(self, content: str) -> Optional[Any]:
        """
        Get cached data for content.

        Args:
            content: Raw YAML text

        Returns:
            Stored data or None if not cached (or disabled)
        """
        if not self.enabled:
            return None

        cache_key = content_fingerprint(content)

        conn = self._connect()
        cursor = conn.cursor()

        cursor.execute(
            "SELECT data FROM result_cache WHERE cache_key = ?",
            (cache_key,)
        )
        row = cursor.fetchone()

        if row is None:
            self.misses += 1
            self.logger.debug(f"Persistent cache miss: {cache_key[:8]}")
            conn.close()
            return None

        cursor.execute("""
            UPDATE result_cache
            SET last_accessed = ?, access_count = access_count + 1
            WHERE cache_key = ?
        """, (datetime.now().isoformat(), cache_key))
        conn.commit()
        conn.close()

        self.hits += 1
        self.logger.debug(f"Persistent cache hit: {cache_key[:8]}")
        return json.loads(row[0])

    def put(self, content: str, data: Any) -> None:
        """
        Store data parsed from content.

        Args:
            content: Raw YAML text
            data: JSON-serializable parsed data
        """
        if not self.enabled:
            return

        cache_key = content_fingerprint(content)
        payload = json.dumps(data, default=str)
        size_bytes = len(payload.encode('utf-8'))

        # Check if we need to evict old entries
        self._enforce_size_limit(size_bytes)

        conn = self._connect()
        now = datetime.now().isoformat()

        conn.execute("""
            INSERT OR REPLACE INTO result_cache
            (cache_key, data, content_size, stored_at, last_accessed, size_bytes)
            VALUES (?, ?, ?, ?, ?, ?)
        """, (cache_key, payload, len(content), now, now, size_bytes))

        conn.commit()
        conn.close()

        self.logger.debug(f"Persisted result: {size_bytes} bytes, key={cache_key[:8]}")

    def forget(self, content: str) -> None:
        """Remove the entry for content."""
        conn = self._connect()
        conn.execute(
            "DELETE FROM result_cache WHERE cache_key = ?",
            (content_fingerprint(content),)
        )
        conn.commit()
        conn.close()

    def _enforce_size_limit(self, new_entry_size: int):
        """Evict old entries if cache would exceed size limit."""
        conn = self._connect()
        cursor = conn.cursor()

        cursor.execute("SELECT SUM(size_bytes) FROM result_cache")
        current_size = cursor.fetchone()[0] or 0
        new_size_mb = (current_size + new_entry_size) / (1024 * 1024)

        if new_size_mb > self.max_size_mb:
            bytes_to_evict = (new_size_mb - self.max_size_mb) * 1024 * 1024

            cursor.execute("""
                SELECT cache_key, size_bytes
                FROM result_cache
                ORDER BY last_accessed ASC
            """)

            bytes_evicted = 0
            evicted_count = 0

            for cache_key, size_bytes in cursor.fetchall():
                if bytes_evicted >= bytes_to_evict:
                    break

                conn.execute("DELETE FROM result_cache WHERE cache_key = ?", (cache_key,))
                bytes_evicted += size_bytes
                evicted_count += 1

            conn.commit()
            self.evictions += evicted_count

            self.logger.info(
                f"Persistent cache eviction: {evicted_count} entries "
                f"({bytes_evicted / (1024 * 1024):.2f} MB)"
            )

        conn.close()

    def clear(self):
        """Remove every entry."""
        conn = self._connect()
        conn.execute("DELETE FROM result_cache")
        conn.commit()
        conn.close()
        self.logger.info("Cleared persistent result cache")

    def get_stats(self) -> dict:
        """Get cache statistics."""
        conn = self._connect()
        cursor = conn.cursor()

        cursor.execute("""
            SELECT
                COUNT(*) as entry_count,
                SUM(size_bytes) as total_size,
                AVG(access_count) as avg_access_count
            FROM result_cache
        """)

        entry_count, total_size, avg_access_count = cursor.fetchone()
        conn.close()

        total_requests = self.hits + self.misses
        hit_rate = self.hits / total_requests if total_requests > 0 else 0

        return {
            'entries': entry_count or 0,
            'size_mb': (total_size or 0) / (1024 * 1024),
            'avg_access_count': avg_access_count or 0,
            'hits': self.hits,
            'misses': self.misses,
            'evictions': self.evictions,
            'hit_rate': hit_rate
        }


__all__ = ['PersistentCache', 'SQLitePersistentCache']
