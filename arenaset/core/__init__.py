"""
Core interning engine: slots, ID codec, map capability, ArenaSet and StadiumSet.
"""

from arenaset.core.errors import (
    ArenaCorruptedError,
    ArenaSetError,
    ErrorKind,
    FromIdFailedError,
    IdOverflowError,
    InvalidIdError,
    ToIdFailedError,
)
from arenaset.core.ids import (
    Index,
    InternId,
    U8,
    U16,
    U32,
    U64,
    apply_remap,
    custom_intern_id,
)
from arenaset.core.maps import HashMap, Map, OrderedMap
from arenaset.core.handles import Shared, deref
from arenaset.core.slots import END, SlotArena, Vacant
from arenaset.core.arena_set import ArenaSet, ArenaSetStats
from arenaset.core.stadium_set import StadiumSet

__all__ = [
    'ArenaCorruptedError',
    'ArenaSetError',
    'ErrorKind',
    'FromIdFailedError',
    'IdOverflowError',
    'InvalidIdError',
    'ToIdFailedError',
    'Index',
    'InternId',
    'U8',
    'U16',
    'U32',
    'U64',
    'apply_remap',
    'custom_intern_id',
    'HashMap',
    'Map',
    'OrderedMap',
    'Shared',
    'deref',
    'END',
    'SlotArena',
    'Vacant',
    'ArenaSet',
    'ArenaSetStats',
    'StadiumSet',
]
