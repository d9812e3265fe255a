# Path: schema_parser/tests/unit/test_memory_manager.py
"""
Unit Tests for memory management

Tests:
- MemoryNegotiator estimates, widening and refusal
- Ceiling restoration on every exit path
- Fixed and process ceilings
- MemoryManager snapshots and GC hints
"""

from unittest.mock import patch

import pytest

from schema_parser.models.error import MemoryLimitUnavailableError
from schema_parser.streaming.memory_manager import (
    FixedMemoryCeiling,
    MemoryManager,
    MemoryNegotiator,
    ProcessMemoryCeiling,
)


class TestNegotiation:
    """Test ceiling negotiation."""

    def test_estimate_uses_multiplier(self):
        negotiator = MemoryNegotiator(ceiling=FixedMemoryCeiling(limit=0), multiplier=3.0)

        assert negotiator.estimate(100) == 300

    def test_enough_headroom_does_not_widen(self, make_ceiling):
        ceiling = make_ceiling(limit=10_000, usage=1_000)
        negotiator = MemoryNegotiator(ceiling=ceiling)

        with negotiator.negotiate(500) as grant:
            assert grant.granted
            assert not grant.widened
            assert ceiling.limit == 10_000

        assert ceiling.set_calls == [10_000]

    def test_widens_then_restores(self, make_ceiling):
        """New ceiling is usage + required + margin; restored afterwards."""
        ceiling = make_ceiling(limit=1_000, usage=900)
        negotiator = MemoryNegotiator(ceiling=ceiling, margin_bytes=10)

        with negotiator.negotiate(300) as grant:
            assert grant.granted
            assert grant.widened
            assert grant.requested_limit == 1_210
            assert ceiling.limit == 1_210

        assert ceiling.limit == 1_000
        assert negotiator.widenings == 1

    def test_restores_when_block_raises(self, make_ceiling):
        ceiling = make_ceiling(limit=1_000, usage=900)
        negotiator = MemoryNegotiator(ceiling=ceiling, margin_bytes=0)

        with pytest.raises(RuntimeError):
            with negotiator.negotiate(300):
                assert ceiling.limit == 1_200
                raise RuntimeError("parse blew up")

        assert ceiling.limit == 1_000

    def test_refusal_raises_and_restores(self, make_ceiling):
        ceiling = make_ceiling(limit=1_000, usage=900, widenable=False)
        negotiator = MemoryNegotiator(ceiling=ceiling, margin_bytes=0)

        with pytest.raises(MemoryLimitUnavailableError) as exc_info:
            with negotiator.negotiate(300):
                pytest.fail("block must not run when memory is unavailable")

        assert exc_info.value.required_bytes == 300
        assert exc_info.value.requested_limit == 1_200
        assert ceiling.set_calls[-1] == 1_000
        assert negotiator.refusals == 1

    def test_refusal_without_raising(self):
        """Legacy mode yields an ungranted grant instead of raising."""
        ceiling = FixedMemoryCeiling(limit=1_000, usage_bytes=1_000)
        negotiator = MemoryNegotiator(ceiling=ceiling, raise_on_failure=False)

        with negotiator.negotiate(10) as grant:
            assert not grant.granted

    def test_unlimited_ceiling_is_granted(self, make_ceiling):
        """Without a ceiling there is nothing to widen."""
        ceiling = make_ceiling(limit=None, usage=0)
        negotiator = MemoryNegotiator(ceiling=ceiling)

        with negotiator.negotiate(10 ** 15) as grant:
            assert grant.granted
            assert not grant.widened

        assert ceiling.limit is None


class TestCeilings:
    """Test ceiling implementations."""

    def test_fixed_ceiling_cannot_widen(self):
        ceiling = FixedMemoryCeiling(limit=100, usage_bytes=40)

        assert ceiling.get() == 100
        assert ceiling.usage() == 40
        assert ceiling.set(200) is False
        assert ceiling.set(100) is True

    def test_process_ceiling_accepts_its_own_value(self):
        """Setting the current limit back is always allowed."""
        ceiling = ProcessMemoryCeiling()

        assert ceiling.set(ceiling.get()) is True
        assert ceiling.usage() > 0


class TestMemoryManager:
    """Test snapshots and GC hints."""

    def test_snapshot_tracks_peak(self):
        manager = MemoryManager()

        snapshot = manager.take_snapshot()

        assert snapshot.rss_mb > 0
        assert snapshot.rss_bytes > 0
        assert manager.peak_snapshot is not None
        assert manager.get_statistics()['current_mb'] == snapshot.rss_mb

    def test_gc_hint_collects_generation(self):
        manager = MemoryManager()

        with patch('schema_parser.streaming.memory_manager.gc') as mock_gc:
            manager.gc_hint(0)

        mock_gc.collect.assert_called_once_with(0)
        assert manager.gc_hints == 1
