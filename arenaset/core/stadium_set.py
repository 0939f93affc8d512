"""
StadiumSet: double-indirection interning.

A StadiumSet is an ArenaSet whose stored values are handles to a further
dereferenceable value, e.g. ``Shared(bytes)``. The map is keyed on the
innermost payload rather than on the handle, so callers can intern and
look up plain payloads while the arena hands out shared handles.
"""

from typing import Any, Callable, Optional, Type

from .arena_set import ArenaSet, ArenaSetStats
from .handles import Shared, deref2
from .ids import Index, InternId
from .maps import HashMap


class StadiumSet:
    """
    Interning over owned-of-owned values.

    Args:
        outer: Builds the owned handle from the inner value (default ``Shared``).
        inner: Builds the inner value from a caller's item (default identity).
        borrow: Extracts the lookup key from a caller's item; defaults to
            dereferencing twice.

    All other arguments are passed to the wrapped ArenaSet.

    Usage:
        >>> p = StadiumSet(Shared, bytes, borrow=bytes)
        >>> p.intern(b'abc'), p.intern(bytearray(b'abc'))
        (Index(0), Index(0))
        >>> p.resolve_owned(0)
        Shared(b'abc')
    """

    def __init__(
        self,
        outer: Callable[[Any], Any] = Shared,
        inner: Optional[Callable[[Any], Any]] = None,
        id_type: Type[InternId] = Index,
        map_type: Type = HashMap,
        *,
        borrow: Optional[Callable[[Any], Any]] = None,
        max_index: Optional[int] = None,
        capacity: int = ArenaSet.DEFAULT_CAPACITY,
    ):
        self.outer = outer
        self.inner = inner
        self.arena = ArenaSet(
            self._build,
            id_type,
            map_type,
            key_of=deref2,
            borrow=borrow or deref2,
            max_index=max_index,
            capacity=capacity,
        )

    @classmethod
    def new(cls, **kwargs) -> 'StadiumSet':
        return cls(**kwargs)

    @classmethod
    def with_capacity(cls, capacity: int, **kwargs) -> 'StadiumSet':
        return cls(capacity=capacity, **kwargs)

    @classmethod
    def bounded_with_capacity(cls, max_index: int, capacity: int, **kwargs) -> 'StadiumSet':
        return cls(max_index=max_index, capacity=capacity, **kwargs)

    def _build(self, item: Any) -> Any:
        value = self.inner(item) if self.inner is not None else item
        return self.outer(value)

    @property
    def id_type(self) -> Type[InternId]:
        return self.arena.id_type

    @property
    def max_index(self) -> int:
        return self.arena.max_index

    def intern(self, item: Any) -> InternId:
        """Intern ``item``, wrapping it as ``outer(inner(item))`` on first sight."""
        return self.arena._insert(item, self._build)

    def disintern(self, id: Any) -> Any:
        return self.arena.disintern(id)

    def resolve(self, id: Any) -> Any:
        """Resolve to the inner value (one dereference of the stored handle)."""
        return self.arena.resolve(id)

    def resolve_owned(self, id: Any) -> Any:
        return self.arena.resolve_owned(id)

    def shrink(self, remap_type: Type = HashMap):
        return self.arena.shrink(remap_type)

    def get_id(self, item: Any) -> Optional[InternId]:
        return self.arena.get_id(item)

    def count(self) -> int:
        return self.arena.count()

    def capacity(self) -> int:
        return self.arena.capacity()

    def items(self):
        return self.arena.items()

    def get_stats(self) -> ArenaSetStats:
        return self.arena.get_stats()

    def check_invariants(self) -> None:
        self.arena.check_invariants()

    def __len__(self) -> int:
        return len(self.arena)

    def __contains__(self, item) -> bool:
        return item in self.arena

    def __repr__(self):
        return (
            f'StadiumSet(count={self.count()}, id_type={self.id_type.__name__}, '
            f'map_type={self.arena.map_type.__name__})'
        )
