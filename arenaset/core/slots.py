"""
Slot Arena
==========

A flat list of slots where vacated cells are chained into an in-place free
list and reused before the list grows.

Memory layout (``head`` = 3):

    index:  0        1          2        3          4
    slot:  "alpha"  Vacant(-1)  "gamma"  Vacant(1)  "epsilon"

Occupied slots hold the owned value directly. Vacant slots hold a private
``Vacant`` marker whose ``next`` field is the following vacant index, or
``END`` at the tail of the chain. "Pointers" are plain indices, so moving
or growing the list never invalidates them.
"""

from typing import Any, Iterable, Iterator, List, Optional, Tuple

from .errors import ArenaCorruptedError

END = -1


class Vacant:
    """Free-list link stored in a vacated slot."""

    __slots__ = ('next',)

    def __init__(self, next: int = END):
        self.next = next

    def __repr__(self):
        return f'Vacant({self.next})'


class SlotArena:
    """
    Append/reuse array of slots.

    Usage:
        >>> slots = SlotArena()
        >>> slots.allocate('a'), slots.allocate('b')
        (0, 1)
        >>> slots.vacate(0)
        'a'
        >>> slots.allocate('c')   # reuses index 0
        0
    """

    def __init__(self, capacity: int = 0):
        self._slots: List[Any] = []
        self._reserved = max(0, capacity)
        self.head = END

    def __len__(self) -> int:
        return len(self._slots)

    @property
    def capacity(self) -> int:
        return max(self._reserved, len(self._slots))

    def allocate(self, value: Any) -> int:
        """Store ``value``, popping the free list before appending."""
        if self.head == END:
            self._slots.append(value)
            return len(self._slots) - 1

        index = self.head
        slot = self._slots[index]
        if not isinstance(slot, Vacant):
            raise ArenaCorruptedError(
                f"free list head {index} points at an occupied slot"
            )
        self._slots[index] = value
        self.head = slot.next
        return index

    def vacate(self, index: int) -> Any:
        """Vacate an occupied slot, link it into the free list, return its value."""
        value = self._slots[index]
        if isinstance(value, Vacant):
            raise ArenaCorruptedError(f"slot {index} is already vacant")
        self._slots[index] = Vacant(self.head)
        self.head = index
        return value

    def is_occupied(self, index: int) -> bool:
        return 0 <= index < len(self._slots) and not isinstance(self._slots[index], Vacant)

    def get(self, index: int) -> Optional[Any]:
        """The value at ``index``, or None if out of range or vacant."""
        if not 0 <= index < len(self._slots):
            return None
        slot = self._slots[index]
        if isinstance(slot, Vacant):
            return None
        return slot

    def iter_occupied(self) -> Iterator[Tuple[int, Any]]:
        for index, slot in enumerate(self._slots):
            if not isinstance(slot, Vacant):
                yield index, slot

    def occupied_count(self) -> int:
        return sum(1 for _ in self.iter_occupied())

    def vacant_indices(self) -> List[int]:
        """Walk the free list from ``head``."""
        chain = []
        index = self.head
        limit = len(self._slots)
        while index != END:
            if len(chain) == limit:
                raise ArenaCorruptedError("free list contains a cycle")
            if not 0 <= index < limit:
                raise ArenaCorruptedError(f"free list link {index} out of range")
            slot = self._slots[index]
            if not isinstance(slot, Vacant):
                raise ArenaCorruptedError(f"free list reaches occupied slot {index}")
            chain.append(index)
            index = slot.next
        return chain

    def rebuild(self, values: Iterable[Any]) -> None:
        """Replace every slot with densely packed occupied slots."""
        self._slots = list(values)
        self._reserved = len(self._slots)
        self.head = END

    def check(self) -> None:
        """Verify that the free list covers exactly the vacant slots."""
        chain = self.vacant_indices()
        vacant = [i for i, slot in enumerate(self._slots) if isinstance(slot, Vacant)]
        if len(chain) != len(set(chain)) or sorted(chain) != vacant:
            raise ArenaCorruptedError(
                f"free list {chain} does not match vacant slots {vacant}"
            )
