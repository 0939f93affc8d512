"""
Tests for the slot arena and its free list.
"""

import pytest

from arenaset.core.errors import ArenaCorruptedError
from arenaset.core.slots import END, SlotArena, Vacant


class TestSlotArena:
    def setup_method(self):
        self.slots = SlotArena()

    def test_append(self):
        assert self.slots.allocate('a') == 0
        assert self.slots.allocate('b') == 1
        assert len(self.slots) == 2
        assert self.slots.head == END

    def test_vacate_links_free_list(self):
        for v in 'abc':
            self.slots.allocate(v)
        assert self.slots.vacate(0) == 'a'
        assert self.slots.vacate(2) == 'c'
        assert self.slots.head == 2
        assert self.slots.vacant_indices() == [2, 0]

    def test_reuse_before_growing(self):
        for v in 'abc':
            self.slots.allocate(v)
        self.slots.vacate(0)
        self.slots.vacate(2)
        assert self.slots.allocate('d') == 2
        assert self.slots.allocate('e') == 0
        assert self.slots.allocate('f') == 3
        assert self.slots.head == END
        self.slots.check()

    def test_get(self):
        self.slots.allocate('a')
        self.slots.allocate('b')
        self.slots.vacate(1)
        assert self.slots.get(0) == 'a'
        assert self.slots.get(1) is None
        assert self.slots.get(2) is None
        assert self.slots.get(-1) is None

    def test_is_occupied(self):
        self.slots.allocate('a')
        assert self.slots.is_occupied(0)
        assert not self.slots.is_occupied(1)
        self.slots.vacate(0)
        assert not self.slots.is_occupied(0)

    def test_iter_occupied(self):
        for v in 'abcd':
            self.slots.allocate(v)
        self.slots.vacate(1)
        assert list(self.slots.iter_occupied()) == [(0, 'a'), (2, 'c'), (3, 'd')]
        assert self.slots.occupied_count() == 3

    def test_vacate_twice_fails_fast(self):
        self.slots.allocate('a')
        self.slots.vacate(0)
        with pytest.raises(ArenaCorruptedError):
            self.slots.vacate(0)

    def test_rebuild(self):
        for v in 'abc':
            self.slots.allocate(v)
        self.slots.vacate(1)
        self.slots.rebuild(['a', 'c'])
        assert self.slots.head == END
        assert list(self.slots.iter_occupied()) == [(0, 'a'), (1, 'c')]
        assert self.slots.capacity == 2

    def test_capacity_hint(self):
        slots = SlotArena(capacity=8)
        assert slots.capacity == 8
        for i in range(10):
            slots.allocate(i)
        assert slots.capacity == 10


class TestCorruption:
    def setup_method(self):
        self.slots = SlotArena()
        for v in 'abc':
            self.slots.allocate(v)
        self.slots.vacate(1)

    def test_head_on_occupied_slot(self):
        self.slots.head = 0
        with pytest.raises(ArenaCorruptedError):
            self.slots.allocate('x')

    def test_cycle(self):
        self.slots._slots[1] = Vacant(1)
        with pytest.raises(ArenaCorruptedError):
            self.slots.vacant_indices()

    def test_unlinked_vacant_slot(self):
        self.slots._slots[2] = Vacant(END)
        with pytest.raises(ArenaCorruptedError):
            self.slots.check()

    def test_link_out_of_range(self):
        self.slots._slots[1] = Vacant(7)
        with pytest.raises(ArenaCorruptedError):
            self.slots.check()
