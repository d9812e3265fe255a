# Path: schema_parser/streaming/memory_manager.py
"""
Memory Management for Large Parses

Monitors process memory and negotiates a temporarily wider memory ceiling
for chunked full-document parses.

Provides:
- MemorySnapshot / MemoryManager: usage tracking and GC hints
- MemoryCeiling implementations: the process-wide limit being negotiated
- MemoryNegotiator: widen the ceiling for one parse, then restore it

The ceiling is process-global. Engines that negotiate memory from several
threads must be serialized by the caller.
"""

import gc
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Iterator, Optional, Protocol

import psutil

try:
    import resource
except ImportError:  # not available on Windows
    resource = None

from ..constants import MEMORY_MULTIPLIER, MEMORY_MARGIN_BYTES
from ..models.error import MemoryLimitUnavailableError


@dataclass
class MemorySnapshot:
    """
    Memory usage snapshot.

    Attributes:
        timestamp: When snapshot was taken
        rss_mb: Resident set Size in megabytes
        vms_mb: Virtual Memory Size in megabytes
        percent: Memory usage as percentage of total
        available_mb: Available system memory in MB
    """
    timestamp: datetime
    rss_mb: float
    vms_mb: float
    percent: float
    available_mb: float

    @property
    def rss_bytes(self) -> int:
        return int(self.rss_mb * 1024 * 1024)

    def __str__(self) -> str:
        """String representation of snapshot."""
        return (
            f"Memory: {self.rss_mb:.1f}MB RSS, "
            f"{self.vms_mb:.1f}MB VMS, "
            f"{self.percent:.1f}% used, "
            f"{self.available_mb:.1f}MB available"
        )


class MemoryManager:
    """
    Memory tracker for parse operations.

    Example:
        manager = MemoryManager()

        before = manager.take_snapshot()
        # Parse
        after = manager.take_snapshot()

        manager.gc_hint()
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self._process = psutil.Process()

        # Tracking
        self.peak_snapshot: Optional[MemorySnapshot] = None
        self.current_snapshot: Optional[MemorySnapshot] = None

        # Statistics
        self.gc_hints = 0

    def take_snapshot(self) -> MemorySnapshot:
        """
        Take current memory snapshot.

        Returns:
            MemorySnapshot with current memory usage
        """
        memory_info = self._process.memory_info()
        virtual_memory = psutil.virtual_memory()

        snapshot = MemorySnapshot(
            timestamp=datetime.now(),
            rss_mb=memory_info.rss / (1024 * 1024),
            vms_mb=memory_info.vms / (1024 * 1024),
            percent=virtual_memory.percent,
            available_mb=virtual_memory.available / (1024 * 1024)
        )

        self.current_snapshot = snapshot

        # Update peak if necessary
        if not self.peak_snapshot or snapshot.rss_mb > self.peak_snapshot.rss_mb:
            self.peak_snapshot = snapshot

        return snapshot

    def gc_hint(self, generation: int = 2) -> int:
        """
        Ask the garbage collector to run.

        Args:
            generation: Oldest generation to collect (0-2)

        Returns:
            Number of unreachable objects found
        """
        self.gc_hints += 1
        return gc.collect(generation)

    def get_statistics(self) -> dict[str, any]:
        """Get memory usage statistics."""
        return {
            'current_mb': self.current_snapshot.rss_mb if self.current_snapshot else 0.0,
            'peak_mb': self.peak_snapshot.rss_mb if self.peak_snapshot else 0.0,
            'gc_hints': self.gc_hints,
        }

    def __str__(self) -> str:
        """String representation."""
        if not self.current_snapshot:
            return "MemoryManager (no data)"

        stats = self.get_statistics()
        return (
            f"MemoryManager("
            f"current={stats['current_mb']:.1f}MB, "
            f"peak={stats['peak_mb']:.1f}MB, "
            f"gc_hints={stats['gc_hints']})"
        )


# ==============================================================================
# MEMORY CEILINGS
# ==============================================================================

class MemoryCeiling(Protocol):
    """
    A process memory limit the negotiator may widen.

    get() returns None when there is no limit. set() returns False when
    the limit cannot be changed to the requested value.
    """

    def get(self) -> Optional[int]:
        ...

    def set(self, limit: Optional[int]) -> bool:
        ...

    def usage(self) -> int:
        ...


class ProcessMemoryCeiling:
    """Soft RLIMIT_AS of the current process (unlimited where unsupported)."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self._process = psutil.Process()

    def get(self) -> Optional[int]:
        if resource is None:
            return None
        soft, _hard = resource.getrlimit(resource.RLIMIT_AS)
        if soft == resource.RLIM_INFINITY:
            return None
        return soft

    def set(self, limit: Optional[int]) -> bool:
        if resource is None:
            return limit is None

        soft, hard = resource.getrlimit(resource.RLIMIT_AS)
        new_soft = resource.RLIM_INFINITY if limit is None else int(limit)

        if hard != resource.RLIM_INFINITY and (
            new_soft == resource.RLIM_INFINITY or new_soft > hard
        ):
            self.logger.debug(f"Requested ceiling {limit} exceeds hard limit {hard}")
            return False

        if new_soft == soft:
            return True

        try:
            resource.setrlimit(resource.RLIMIT_AS, (new_soft, hard))
        except (ValueError, OSError) as e:
            self.logger.warning(f"Could not set memory ceiling to {limit}: {e}")
            return False
        return True

    def usage(self) -> int:
        # RLIMIT_AS bounds the virtual address space
        return self._process.memory_info().vms


class FixedMemoryCeiling:
    """
    Fixed heap budget that can never be widened.

    For hosts that must fail fast instead of growing the process.
    """

    def __init__(self, limit: int, usage_bytes: Optional[int] = None):
        """
        Args:
            limit: Budget in bytes
            usage_bytes: Fixed usage figure (defaults to live process RSS)
        """
        self.limit = limit
        self.usage_bytes = usage_bytes

    def get(self) -> Optional[int]:
        return self.limit

    def set(self, limit: Optional[int]) -> bool:
        return limit == self.limit

    def usage(self) -> int:
        if self.usage_bytes is not None:
            return self.usage_bytes
        return psutil.Process().memory_info().rss


# ==============================================================================
# NEGOTIATION
# ==============================================================================

@dataclass
class MemoryGrant:
    """
    Outcome of one negotiation.

    Attributes:
        required_bytes: Estimated bytes the parse needs
        original_limit: Ceiling before negotiation (None = unlimited)
        requested_limit: Ceiling asked for when widening was needed
        widened: Ceiling was raised for this parse
        granted: Parse may proceed
    """
    required_bytes: int
    original_limit: Optional[int]
    requested_limit: Optional[int] = None
    widened: bool = False
    granted: bool = True


class MemoryNegotiator:
    """
    Temporarily widen the memory ceiling for a full-document parse.

    Example:
        negotiator = MemoryNegotiator()

        with negotiator.negotiate(negotiator.estimate(len(content))) as grant:
            if grant.granted:
                data = parser.parse(content)
        # Ceiling is back to its original value here, even on error
    """

    def __init__(
        self,
        ceiling: Optional[MemoryCeiling] = None,
        multiplier: float = MEMORY_MULTIPLIER,
        margin_bytes: int = MEMORY_MARGIN_BYTES,
        raise_on_failure: bool = True
    ):
        """
        Initialize negotiator.

        Args:
            ceiling: Limit to negotiate (defaults to the process RLIMIT_AS)
            multiplier: Parse tree size as a multiple of text size
            margin_bytes: Extra headroom added when widening
            raise_on_failure: Raise MemoryLimitUnavailableError when the
                ceiling cannot be widened (False yields an ungranted grant)
        """
        self.ceiling = ceiling if ceiling is not None else ProcessMemoryCeiling()
        self.multiplier = multiplier
        self.margin_bytes = margin_bytes
        self.raise_on_failure = raise_on_failure
        self.logger = logging.getLogger(__name__)

        # Statistics
        self.negotiations = 0
        self.widenings = 0
        self.refusals = 0

    def estimate(self, content_size: int) -> int:
        """Estimated bytes needed to parse content_size characters."""
        return int(content_size * self.multiplier)

    def headroom(self, limit: Optional[int]) -> int:
        """Bytes left under limit (available system memory when unlimited)."""
        if limit is None:
            return psutil.virtual_memory().available
        return limit - self.ceiling.usage()

    @contextmanager
    def negotiate(self, required_bytes: int) -> Iterator[MemoryGrant]:
        """
        Make room for required_bytes for the duration of the block.

        The original ceiling is restored on every exit path.

        Args:
            required_bytes: Bytes the parse needs

        Yields:
            MemoryGrant

        Raises:
            MemoryLimitUnavailableError: If widening failed and
                raise_on_failure is set
        """
        self.negotiations += 1
        original = self.ceiling.get()

        try:
            grant = self._acquire(required_bytes, original)
            if not grant.granted and self.raise_on_failure:
                raise MemoryLimitUnavailableError(required_bytes, grant.requested_limit)
            yield grant
        finally:
            if not self.ceiling.set(original):
                self.logger.error(f"Failed to restore memory ceiling to {original}")

    def _acquire(self, required_bytes: int, original: Optional[int]) -> MemoryGrant:
        grant = MemoryGrant(required_bytes=required_bytes, original_limit=original)
        available = self.headroom(original)

        if available >= required_bytes:
            return grant

        if original is None:
            # No ceiling to widen: the system itself is short
            self.logger.warning(
                f"Only {available} bytes of system memory available, "
                f"{required_bytes} estimated for parse"
            )
            return grant

        requested = self.ceiling.usage() + required_bytes + self.margin_bytes
        grant.requested_limit = requested

        if self.ceiling.set(requested):
            grant.widened = True
            self.widenings += 1
            self.logger.warning(
                f"Memory ceiling raised from {original} to {requested} bytes "
                f"for {required_bytes} byte parse"
            )
            return grant

        grant.granted = False
        self.refusals += 1
        self.logger.warning(
            f"Memory ceiling could not be raised to {requested} bytes "
            f"(current {original}, required {required_bytes})"
        )
        return grant

    def get_statistics(self) -> dict[str, int]:
        return {
            'negotiations': self.negotiations,
            'widenings': self.widenings,
            'refusals': self.refusals,
        }


__all__ = [
    'MemorySnapshot',
    'MemoryManager',
    'MemoryCeiling',
    'ProcessMemoryCeiling',
    'FixedMemoryCeiling',
    'MemoryGrant',
    'MemoryNegotiator',
]
