"""
Tests for StadiumSet (double-indirection interning).

Validates:
  - map keys are the innermost payload, not the handles
  - callers may intern payloads, inner values or handles interchangeably
  - disintern/resolve/shrink delegate to the wrapped ArenaSet
"""

import pytest

from arenaset.builder import byte_stadium_set, string_stadium_set
from arenaset.core.errors import IdOverflowError, InvalidIdError
from arenaset.core.handles import Shared, deref
from arenaset.core.stadium_set import StadiumSet


class Buffer:
    """Owned byte buffer exposing its bytes as the payload."""

    def __init__(self, data):
        self.data = bytes(data)

    def deref(self):
        return self.data


class TestStringStadium:
    def setup_method(self):
        self.p = string_stadium_set()

    def test_intern_payload_or_handle(self):
        assert self.p.intern('hello') == 0
        assert self.p.intern(Shared('hello')) == 0
        assert self.p.intern('world') == 1
        assert self.p.count() == 2

    def test_resolve(self):
        self.p.intern('hello')
        assert self.p.resolve(0) == 'hello'
        owned = self.p.resolve_owned(0)
        assert isinstance(owned, Shared)
        assert owned.deref() == 'hello'

    def test_key_is_leaf_payload(self):
        self.p.intern('hello')
        (key,) = list(self.p.arena._map)
        assert key is self.p.resolve_owned(0).deref()

    def test_disintern_returns_handle(self):
        self.p.intern('hello')
        owned = self.p.disintern(0)
        assert owned == Shared('hello')
        with pytest.raises(InvalidIdError):
            self.p.resolve(0)
        assert 'hello' not in self.p


class TestThreeLevels:
    def setup_method(self):
        self.p = StadiumSet(Shared, Buffer)

    def test_keyed_on_buffer_contents(self):
        assert self.p.intern(b'xy') == 0
        assert self.p.intern(Buffer(b'xy')) == 0
        assert self.p.intern(Shared(Buffer(b'xy'))) == 0
        assert self.p.count() == 1
        (key,) = list(self.p.arena._map)
        assert key == b'xy'

    def test_resolve_levels(self):
        self.p.intern(b'xy')
        inner = self.p.resolve(0)
        assert isinstance(inner, Buffer)
        assert inner.data == b'xy'
        assert deref(self.p.resolve_owned(0)) is inner

    def test_shrink(self):
        for blob in [b'a', b'b', b'c']:
            self.p.intern(blob)
        self.p.disintern(0)
        remap = self.p.shrink()
        assert remap == {1: 0, 2: 1}
        assert self.p.resolve(0).data == b'b'
        self.p.check_invariants()


class TestByteStadium:
    def test_bytes_like_items(self):
        p = byte_stadium_set()
        assert p.intern(bytearray(b'abc')) == 0
        assert p.intern(b'abc') == 0
        assert p.intern(memoryview(b'abc')) == 0
        assert p.intern([97, 98, 99]) == 0
        assert p.resolve(0) == b'abc'
        assert p.disintern(0).deref() == b'abc'

    def test_bounded(self):
        p = StadiumSet.bounded_with_capacity(1, 4, inner=bytes)
        p.intern(b'a')
        p.intern(b'b')
        with pytest.raises(IdOverflowError):
            p.intern(b'c')
        assert p.capacity() == 4
        assert len(p) == 2

    def test_get_id_and_items(self):
        p = byte_stadium_set()
        p.intern(b'a')
        p.intern(b'b')
        assert p.get_id(b'b') == 1
        assert list(p.items()) == [(0, b'a'), (1, b'b')]
        assert p.get_stats().allocations == 2
        assert repr(p) == 'StadiumSet(count=2, id_type=Index, map_type=HashMap)'
