# Path: schema_parser/foundation/fingerprint.py
"""
Content fingerprinting for cache keys.

xxh3 (128-bit) over the UTF-8 text: fast, non-cryptographic. Hits are not
verified against the full content.
"""

from typing import Iterable, Optional

import xxhash


def content_fingerprint(content: str) -> str:
    """Hex fingerprint of content."""
    return xxhash.xxh3_128_hexdigest(content.encode('utf-8', 'surrogatepass'))


def cache_key(fingerprint: str, sections: Optional[Iterable[str]] = None) -> str:
    """
    Cache key for a parse of fingerprinted content.

    Results that depend on a section selection carry it in the key.
    """
    if not sections:
        return fingerprint
    return f"{fingerprint}:{','.join(sorted(set(sections)))}"


__all__ = ['content_fingerprint', 'cache_key']
