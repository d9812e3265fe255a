# Path: schema_parser/cache/__init__.py
"""
Cache Module

- result_cache: bounded in-memory fingerprint -> ParseResult map
- persistent_cache: optional SQLite-backed second tier
"""

from ..cache.result_cache import ResultCache
from ..cache.persistent_cache import PersistentCache, SQLitePersistentCache

__all__ = [
    'ResultCache',
    'PersistentCache',
    'SQLitePersistentCache',
]
