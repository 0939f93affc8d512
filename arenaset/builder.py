"""
Builder and convenience factories.

    >>> p = Builder(str).hash()
    >>> p.intern('hello')
    Index(0)

    >>> s = Builder(Shared, inner=str).stadium_hash()
    >>> s.intern('hello')
    Index(0)
    >>> s.resolve_owned(0)
    Shared('hello')
"""

from dataclasses import dataclass, replace
from typing import Any, Callable, Optional, Type

from .core.arena_set import ArenaSet
from .core.handles import Shared, deref, deref2
from .core.ids import Index, InternId
from .core.maps import HashMap, OrderedMap
from .core.stadium_set import StadiumSet


@dataclass(frozen=True)
class Builder:
    """
    Reusable ArenaSet / StadiumSet configuration.

    ``to_owned`` builds the stored value for an ArenaSet, or the outer
    handle for a StadiumSet (whose inner value is built by ``inner``).
    """
    to_owned: Optional[Callable[[Any], Any]] = None
    id_type: Type[InternId] = Index
    inner: Optional[Callable[[Any], Any]] = None
    borrow: Optional[Callable[[Any], Any]] = None
    max_index: Optional[int] = None
    capacity: int = ArenaSet.DEFAULT_CAPACITY

    def bounded(self, max_index: int) -> 'Builder':
        return replace(self, max_index=max_index)

    def with_capacity(self, capacity: int) -> 'Builder':
        return replace(self, capacity=capacity)

    def with_id_type(self, id_type: Type[InternId]) -> 'Builder':
        return replace(self, id_type=id_type)

    def _arena(self, map_type: Type) -> ArenaSet:
        return ArenaSet(
            self.to_owned,
            self.id_type,
            map_type,
            borrow=self.borrow,
            max_index=self.max_index,
            capacity=self.capacity,
        )

    def _stadium(self, map_type: Type) -> StadiumSet:
        return StadiumSet(
            self.to_owned or Shared,
            self.inner,
            self.id_type,
            map_type,
            borrow=self.borrow,
            max_index=self.max_index,
            capacity=self.capacity,
        )

    def hash(self) -> ArenaSet:
        """ArenaSet backed by a HashMap (payloads must be hashable)."""
        return self._arena(HashMap)

    def ordered(self) -> ArenaSet:
        """ArenaSet backed by an OrderedMap (payloads must be orderable)."""
        return self._arena(OrderedMap)

    def stadium_hash(self) -> StadiumSet:
        return self._stadium(HashMap)

    def stadium_ordered(self) -> StadiumSet:
        return self._stadium(OrderedMap)


def builder(to_owned: Optional[Callable[[Any], Any]] = None, **kwargs) -> Builder:
    """Create a Builder with ``Index`` IDs."""
    return Builder(to_owned, **kwargs)


def _as_bytes(item: Any) -> bytes:
    item = deref(item)
    return item if isinstance(item, bytes) else bytes(item)


def _leaf_bytes(item: Any) -> bytes:
    item = deref2(item)
    return item if isinstance(item, bytes) else bytes(item)


def _as_str(item: Any) -> str:
    item = deref(item)
    return item if isinstance(item, str) else str(item)


def _leaf_str(item: Any) -> str:
    item = deref2(item)
    return item if isinstance(item, str) else str(item)


def string_arena_set() -> ArenaSet:
    """ArenaSet of ``str`` with a HashMap and ``Index`` IDs; other items are stored as ``str(item)``."""
    return builder(_as_str, borrow=_as_str).hash()


def byte_arena_set() -> ArenaSet:
    """ArenaSet of ``bytes`` with a HashMap and ``Index`` IDs; accepts any bytes-like item."""
    return builder(_as_bytes, borrow=_as_bytes).hash()


def string_stadium_set() -> StadiumSet:
    """StadiumSet of ``Shared(str)`` with a HashMap and ``Index`` IDs."""
    return builder(Shared, inner=_leaf_str, borrow=_leaf_str).stadium_hash()


def byte_stadium_set() -> StadiumSet:
    """StadiumSet of ``Shared(bytes)`` with a HashMap and ``Index`` IDs."""
    return builder(Shared, inner=_leaf_bytes, borrow=_leaf_bytes).stadium_hash()
