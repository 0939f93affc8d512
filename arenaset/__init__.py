"""
arenaset: Generic Interning Arenas
==================================

Assigns each distinct value a small bounded integer ID, returns the same ID
for equal values, and resolves IDs back to values in O(1) without storing
values twice.

Core Components:
    - ArenaSet: intern / disintern / resolve / shrink over a slot arena
      with free-list reuse
    - StadiumSet: the same over shared handles, keyed on the inner payload
    - InternId: bounded ID types backed by numpy integer dtypes
    - Map: pluggable key -> ID container (HashMap, OrderedMap)

Usage:
    >>> import arenaset
    >>> p = arenaset.string_arena_set()
    >>> p.intern('hello')
    Index(0)
    >>> p.resolve(0)
    'hello'

    >>> Small = arenaset.custom_intern_id('Small', 'uint8', 0, 3)
    >>> p = arenaset.Builder(str, Small).hash()
"""

__version__ = "0.4.0"

from arenaset.core import (
    ArenaCorruptedError,
    ArenaSet,
    ArenaSetError,
    ArenaSetStats,
    ErrorKind,
    FromIdFailedError,
    HashMap,
    IdOverflowError,
    Index,
    InternId,
    InvalidIdError,
    Map,
    OrderedMap,
    Shared,
    StadiumSet,
    ToIdFailedError,
    U8,
    U16,
    U32,
    U64,
    apply_remap,
    custom_intern_id,
    deref,
)
from arenaset.builder import (
    Builder,
    builder,
    byte_arena_set,
    byte_stadium_set,
    string_arena_set,
    string_stadium_set,
)
