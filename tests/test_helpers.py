"""
Tests for the benchmark timing helpers.
"""

import gc

import pytest

from arenaset import string_arena_set
from arenaset.utils.helpers import format_ns, time_per_op, timed


class TestTimed:
    def test_result_and_elapsed(self):
        result, elapsed = timed(lambda: sum(range(1000)))
        assert result == 499500
        assert elapsed >= 0

    def test_collector_paused_and_restored(self):
        seen = []
        timed(lambda: seen.append(gc.isenabled()))
        assert seen == [False]
        assert gc.isenabled()

    def test_collector_restored_on_error(self):
        def boom():
            raise KeyError('x')

        with pytest.raises(KeyError):
            timed(boom)
        assert gc.isenabled()


class TestTimePerOp:
    def test_fresh_state_per_repeat(self):
        states = []

        def setup():
            p = string_arena_set()
            states.append(p)
            return p

        result = time_per_op(setup, lambda p, w: p.intern(w), ['a', 'b', 'c'], repeats=3)
        assert result['ops'] == 3
        assert result['min_ns'] <= result['median_ns']
        assert len(states) == 3
        assert all(p.count() == 3 for p in states)


class TestFormatNs:
    def test_units(self):
        assert format_ns(500) == '500 ns'
        assert format_ns(1_500) == '1.5 µs'
        assert format_ns(2_500_000) == '2.50 ms'
        assert format_ns(3_000_000_000) == '3.000 s'
