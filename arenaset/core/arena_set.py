"""
ArenaSet: Interning Engine
==========================

An ArenaSet assigns every distinct value a small bounded ID, returns the
same ID when an equal value is interned again, and resolves IDs back to
values in O(1).

Internals
---------
For strings the structure looks like this:

    map:    {'alpha': 0, 'gamma': 2}          key -> ID
    slots:  ['alpha', Vacant(-1), 'gamma']    index -> owned value
    head:   1                                 first vacant slot

A naive design would keep ``{str: id}`` *and* ``[str]`` and hold two
references to equal strings built independently. Here the key stored in
the map is the payload object taken from the stored value itself, so each
interned value exists once; the garbage collector keeps it alive for as
long as its slot does. Map entries are added and removed in lock-step with
the slots.

Vacated slots form a free list threaded through the slot list and are
reused before the list grows.

Custom ID Types
---------------
IDs default to ``Index`` (the full ``numpy.uintp`` range). A narrower ID
type bounds the number of distinct live values; interning one more raises
IdOverflowError:

    >>> Small = custom_intern_id('Small', np.uint8, 0, 3)
    >>> p = ArenaSet(id_type=Small)
    >>> [p.intern(s) for s in ('one', 'two', 'three', 'four')]
    [Small(0), Small(1), Small(2), Small(3)]
    >>> p.intern('five')
    Traceback (most recent call last):
    ...
    IdOverflowError: ...
    >>> p.disintern(0)
    'one'
    >>> p.intern('six')
    Small(0)

Not thread-safe: callers sharing an arena across threads must hold their
own lock around every call.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterator, Optional, Tuple, Type, TypeVar

from .errors import ArenaCorruptedError, IdOverflowError, InvalidIdError, ToIdFailedError
from .handles import deref
from .ids import Index, InternId
from .maps import HashMap
from .slots import END, SlotArena

O = TypeVar('O')
logger = logging.getLogger(__name__)


def _identity(item: Any) -> Any:
    return item


@dataclass
class ArenaSetStats:
    """Counters for an ArenaSet."""
    intern_calls: int = 0
    intern_hits: int = 0
    allocations: int = 0
    slot_reuses: int = 0
    disinterns: int = 0
    rollbacks: int = 0
    overflows: int = 0
    shrinks: int = 0
    shrink_dropped: int = 0
    live_count: int = 0
    slot_count: int = 0

    @property
    def hit_rate(self) -> float:
        if self.intern_calls == 0:
            return 0.0
        return self.intern_hits / self.intern_calls


class ArenaSet(Generic[O]):
    """
    Generic internment structure.

    Args:
        to_owned: Converts a caller's item into the value the arena stores
            (e.g. ``bytes`` for a byte arena). Defaults to identity.
        id_type: ``InternId`` subclass used for IDs.
        map_type: Map capability class for the key -> ID map.
        key_of: Extracts the map key (payload) from a stored value.
            Defaults to ``deref``.
        borrow: Extracts the lookup key from a caller's item without
            converting it. Defaults to ``key_of``.
        max_index: Largest slot index allowed; defaults to
            ``id_type.span()``.
        capacity: Capacity hint for the slots and the map.

    Usage:
        >>> p = ArenaSet()
        >>> p.intern('hello'), p.intern('world'), p.intern('hello')
        (Index(0), Index(1), Index(0))
        >>> p.resolve(1)
        'world'
    """

    DEFAULT_CAPACITY = 0

    def __init__(
        self,
        to_owned: Optional[Callable[[Any], O]] = None,
        id_type: Type[InternId] = Index,
        map_type: Type = HashMap,
        *,
        key_of: Callable[[O], Any] = deref,
        borrow: Optional[Callable[[Any], Any]] = None,
        max_index: Optional[int] = None,
        capacity: int = DEFAULT_CAPACITY,
    ):
        span = id_type.span()
        if max_index is None:
            max_index = span
        elif max_index < 0 or max_index > span:
            raise IdOverflowError(
                f"max_index {max_index} exceeds the {id_type.__name__} "
                f"ID space (largest index {span})"
            )

        self.id_type = id_type
        self.map_type = map_type
        self.max_index = max_index
        self._to_owned = to_owned or _identity
        self._key_of = key_of
        self._borrow = borrow or key_of
        self._map = map_type.with_capacity(capacity)
        self._slots = SlotArena(capacity)
        self.stats = ArenaSetStats()

    @classmethod
    def new(cls, **kwargs) -> 'ArenaSet':
        """Create an empty ArenaSet."""
        return cls.with_capacity(0, **kwargs)

    @classmethod
    def with_capacity(cls, capacity: int, **kwargs) -> 'ArenaSet':
        """Create an empty ArenaSet with a capacity hint."""
        return cls(capacity=capacity, **kwargs)

    @classmethod
    def bounded_with_capacity(cls, max_index: int, capacity: int, **kwargs) -> 'ArenaSet':
        """Create an empty ArenaSet with an explicit maximum index and a capacity hint."""
        return cls(max_index=max_index, capacity=capacity, **kwargs)

    def count(self) -> int:
        """Number of interned items."""
        return len(self._map)

    def capacity(self) -> int:
        """Reserved size of the slot list."""
        return self._slots.capacity

    def __len__(self) -> int:
        return len(self._map)

    def __contains__(self, item) -> bool:
        return self._map.get(self._borrow(item)) is not None

    def __repr__(self):
        return (
            f'{type(self).__name__}(count={self.count()}, '
            f'id_type={self.id_type.__name__}, map_type={self.map_type.__name__})'
        )

    # ------------------------------------------------------------------
    # Core operations
    # ------------------------------------------------------------------

    def intern(self, item: Any) -> InternId:
        """
        Intern an item, receiving an ID that can later be resolved.

        If an equal item is already interned, nothing changes and its
        current ID is returned.

        Raises:
            IdOverflowError: the ID space has no room for another value.
            ToIdFailedError: the slot index could not be encoded; the slot
                is released again before the error propagates.
            ArenaCorruptedError: the map already held the stored key, which
                only a broken ``Map`` backend allows.
        """
        return self._insert(item, self._to_owned)

    def _insert(self, item: Any, to_owned: Callable[[Any], Any]) -> InternId:
        self.stats.intern_calls += 1

        # Fast path: already interned
        existing = self._map.get(self._borrow(item))
        if existing is not None:
            self.stats.intern_hits += 1
            return existing

        # The borrowed key can differ from the stored one (``5`` vs ``'5'``).
        owned = to_owned(item)
        key = self._key_of(owned)
        existing = self._map.get(key)
        if existing is not None:
            self.stats.intern_hits += 1
            return existing

        count = len(self._map)
        if count and count - 1 == self.max_index:
            self.stats.overflows += 1
            logger.debug(f"ID space exhausted at {count} items (max index {self.max_index})")
            raise IdOverflowError(
                f"{self.id_type.__name__} ID space exhausted ({count} items)"
            )

        reused = self._slots.head != END
        index = self._slots.allocate(owned)

        try:
            id = self.id_type.from_index(index)
        except ToIdFailedError:
            # Put the slot straight back on the free list.
            self._slots.vacate(index)
            self.stats.rollbacks += 1
            logger.debug(f"Rolled back slot {index}: not representable as {self.id_type.__name__}")
            raise

        previous = self._map.insert(key, id)
        if previous is not None:
            self._map.insert(key, previous)
            self._slots.vacate(index)
            raise ArenaCorruptedError(
                f"key {key!r} was already mapped to {previous!r}; "
                f"slot {index} released"
            )
        self.stats.allocations += 1
        if reused:
            self.stats.slot_reuses += 1
        return id

    def _locate(self, id: Any) -> int:
        index = self.id_type.to_index(id)
        if not self._slots.is_occupied(index):
            raise InvalidIdError(f"{id!r} does not refer to an interned item", id=id)
        return index

    def disintern(self, id: Any) -> O:
        """
        Remove an item by its ID and hand the stored value back.

        The ID becomes invalid; interning the item again may yield a
        different ID.

        Raises:
            FromIdFailedError: ``id`` cannot be decoded.
            InvalidIdError: ``id`` was never issued or is already disinterned.
        """
        index = self._locate(id)
        owned = self._slots.vacate(index)
        self._map.remove(self._key_of(owned))
        self.stats.disinterns += 1
        return owned

    def resolve(self, id: Any) -> Any:
        """
        Resolve an ID to its payload in O(1).

        The returned object is owned by the arena and must not be mutated.
        """
        return deref(self._slots.get(self._locate(id)))

    def resolve_owned(self, id: Any) -> O:
        """Resolve an ID to the stored value itself (e.g. the shared handle)."""
        return self._slots.get(self._locate(id))

    def get_id(self, item: Any) -> Optional[InternId]:
        """The ID of ``item`` if it is interned, else None. Never allocates."""
        return self._map.get(self._borrow(item))

    def items(self) -> Iterator[Tuple[InternId, Any]]:
        """Iterate ``(id, payload)`` pairs in slot order."""
        for index, owned in self._slots.iter_occupied():
            yield self.id_type.from_index(index), deref(owned)

    def shrink(self, remap_type: Type = HashMap):
        """
        Compact the slots, renumbering live items densely from 0.

        Returns a ``remap_type`` map of old ID -> new ID. An item whose old
        or new index cannot be encoded as the ID type is disinterned and
        gets no entry in the map.

        Complexity: O(survivors) map inserts + O(dropped) map removals
        """
        remap = remap_type.new()
        survivors = []
        dropped = 0

        for old_index, owned in self._slots.iter_occupied():
            key = self._key_of(owned)
            try:
                old_id = self.id_type.from_index(old_index)
                new_id = self.id_type.from_index(len(survivors))
            except ToIdFailedError:
                self._map.remove(key)
                dropped += 1
                logger.debug(f"Dropped slot {old_index} during shrink: ID not representable")
                continue
            remap.insert(old_id, new_id)
            self._map.insert(key, new_id)
            survivors.append(owned)

        self._slots.rebuild(survivors)
        self._map.shrink_to_fit()

        self.stats.shrinks += 1
        self.stats.shrink_dropped += dropped
        logger.debug(f"Shrunk to {len(survivors)} slots ({dropped} dropped)")
        return remap

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def get_stats(self) -> ArenaSetStats:
        """Get usage statistics."""
        self.stats.live_count = len(self._map)
        self.stats.slot_count = len(self._slots)
        return self.stats

    def check_invariants(self) -> None:
        """
        Verify the slot/map bookkeeping.

        Raises ArenaCorruptedError if the free list is broken, or if the
        map and the occupied slots disagree.
        """
        self._slots.check()
        occupied = list(self._slots.iter_occupied())
        if len(occupied) != len(self._map):
            raise ArenaCorruptedError(
                f"{len(self._map)} map entries for {len(occupied)} occupied slots"
            )
        for index, owned in occupied:
            id = self._map.get(self._key_of(owned))
            if id is None or self.id_type.to_index(id) != index:
                raise ArenaCorruptedError(f"slot {index} is not indexed by its ID")
