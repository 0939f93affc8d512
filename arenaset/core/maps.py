"""
Map Capability
==============

The ArenaSet does not hard-code its key -> ID container. Any class that
satisfies the ``Map`` protocol can be injected through ``map_type``:

    new() / with_capacity(n)     construct an empty map
    len(m)                       number of pairs
    insert(key, value)           store, returning the previous value or None
    get(key)                     value or None
    remove(key)                  pop, returning the value or None
    shrink_to_fit()              release spare memory (may be a no-op)

There is deliberately no ``setdefault``-style entry API: the key used for
the lookup belongs to the caller, while the key stored in the map must be
the payload owned by the arena.

Two backends are provided:
  - HashMap: equality + hash (dict based)
  - OrderedMap: equality + ordering (sorted keys via ``bisect``),
    iterating in key order
"""

import bisect
from typing import Any, Iterator, List, Optional, Protocol, Tuple, TypeVar, runtime_checkable

K = TypeVar('K')
V = TypeVar('V')


@runtime_checkable
class Map(Protocol):
    """Structural interface for the key -> ID map of an ArenaSet."""

    @classmethod
    def new(cls) -> 'Map':
        ...

    @classmethod
    def with_capacity(cls, capacity: int) -> 'Map':
        ...

    def __len__(self) -> int:
        ...

    def insert(self, key: Any, value: Any) -> Optional[Any]:
        ...

    def get(self, key: Any) -> Optional[Any]:
        ...

    def remove(self, key: Any) -> Optional[Any]:
        ...

    def shrink_to_fit(self) -> None:
        ...


class HashMap(dict):
    """
    dict with the Map capability.

    Being a real dict, it also supports the whole mapping API, so a
    remap returned by ``shrink`` can be indexed directly (``remap[2]``).
    """

    __slots__ = ()

    @classmethod
    def new(cls) -> 'HashMap':
        return cls()

    @classmethod
    def with_capacity(cls, capacity: int) -> 'HashMap':
        # dicts cannot be pre-sized from Python
        return cls()

    def insert(self, key, value):
        previous = dict.get(self, key)
        self[key] = value
        return previous

    def remove(self, key):
        return self.pop(key, None)

    def shrink_to_fit(self) -> None:
        # dicts never shrink their table on deletion; clearing releases it
        # and update() allocates one sized for the remaining pairs.
        items = list(self.items())
        self.clear()
        self.update(items)

    def __repr__(self):
        return f'HashMap({dict.__repr__(self)})'


class OrderedMap:
    """
    Sorted map with the Map capability.

    Keys only need equality and ordering, not hashing. Lookups are
    O(log n) binary searches; inserts and removes shift the key list.
    """

    __slots__ = ('_keys', '_values')

    def __init__(self, items: Optional[List[Tuple[Any, Any]]] = None):
        self._keys: List[Any] = []
        self._values: List[Any] = []
        if items:
            for key, value in items:
                self.insert(key, value)

    @classmethod
    def new(cls) -> 'OrderedMap':
        return cls()

    @classmethod
    def with_capacity(cls, capacity: int) -> 'OrderedMap':
        return cls()

    def _find(self, key) -> Tuple[int, bool]:
        i = bisect.bisect_left(self._keys, key)
        return i, i < len(self._keys) and self._keys[i] == key

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, key) -> bool:
        return self._find(key)[1]

    def __getitem__(self, key):
        i, found = self._find(key)
        if not found:
            raise KeyError(key)
        return self._values[i]

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._keys))

    def __eq__(self, other):
        if isinstance(other, OrderedMap):
            return self._keys == other._keys and self._values == other._values
        if isinstance(other, dict):
            return dict(self.items()) == other
        return NotImplemented

    def insert(self, key, value):
        i, found = self._find(key)
        if found:
            previous = self._values[i]
            self._values[i] = value
            return previous
        self._keys.insert(i, key)
        self._values.insert(i, value)
        return None

    def get(self, key, default=None):
        i, found = self._find(key)
        return self._values[i] if found else default

    def remove(self, key):
        i, found = self._find(key)
        if not found:
            return None
        del self._keys[i]
        return self._values.pop(i)

    def shrink_to_fit(self) -> None:
        pass

    def keys(self) -> List[Any]:
        return list(self._keys)

    def values(self) -> List[Any]:
        return list(self._values)

    def items(self) -> List[Tuple[Any, Any]]:
        return list(zip(self._keys, self._values))

    def __repr__(self):
        body = ', '.join(f'{k!r}: {v!r}' for k, v in self.items())
        return f'OrderedMap({{{body}}})'
