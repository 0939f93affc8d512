"""
Tests for the map capability backends.

Validates:
  - HashMap and OrderedMap satisfy the Map protocol
  - insert/get/remove return values
  - OrderedMap keeps keys sorted and needs no hashing
  - shrink_to_fit preserves contents
"""

import pytest

from arenaset.core.maps import HashMap, Map, OrderedMap


@pytest.mark.parametrize('map_type', [HashMap, OrderedMap])
class TestMapCapability:
    def test_protocol(self, map_type):
        assert isinstance(map_type.new(), Map)
        assert isinstance(map_type.with_capacity(32), Map)

    def test_insert_returns_previous(self, map_type):
        m = map_type.new()
        assert m.insert('a', 1) is None
        assert m.insert('a', 2) == 1
        assert m.get('a') == 2
        assert len(m) == 1

    def test_get_missing(self, map_type):
        m = map_type.new()
        assert m.get('missing') is None

    def test_remove(self, map_type):
        m = map_type.new()
        m.insert('a', 1)
        m.insert('b', 2)
        assert m.remove('a') == 1
        assert m.remove('a') is None
        assert len(m) == 1
        assert m.get('b') == 2

    def test_shrink_to_fit(self, map_type):
        m = map_type.with_capacity(100)
        for i in range(100):
            m.insert(f'k{i}', i)
        for i in range(90):
            m.remove(f'k{i}')
        m.shrink_to_fit()
        assert len(m) == 10
        assert m.get('k95') == 95


class TestHashMap:
    def test_is_a_dict(self):
        m = HashMap()
        m.insert(2, 1)
        assert m == {2: 1}
        assert m[2] == 1

    def test_repr(self):
        m = HashMap()
        m.insert('a', 1)
        assert repr(m) == "HashMap({'a': 1})"


class TestOrderedMap:
    def test_sorted_iteration(self):
        m = OrderedMap()
        for key in ['delta', 'alpha', 'charlie', 'bravo']:
            m.insert(key, len(key))
        assert list(m) == ['alpha', 'bravo', 'charlie', 'delta']
        assert m.items()[0] == ('alpha', 5)

    def test_unhashable_keys(self):
        m = OrderedMap()
        m.insert([2, 1], 'x')
        m.insert([1, 5], 'y')
        assert m.get([2, 1]) == 'x'
        assert m.keys() == [[1, 5], [2, 1]]
        assert [1, 5] in m

    def test_getitem(self):
        m = OrderedMap([(3, 'c'), (1, 'a')])
        assert m[1] == 'a'
        with pytest.raises(KeyError):
            m[2]

    def test_equality(self):
        m = OrderedMap([(0, 0), (2, 1)])
        assert m == {0: 0, 2: 1}
        assert m == OrderedMap([(2, 1), (0, 0)])
        assert m != {0: 0}
