"""
Errors raised by ArenaSet and StadiumSet.

Every user-facing failure is an ``ArenaSetError`` carrying an ``ErrorKind``,
so callers can either catch the specific class or switch on ``err.kind``.
``ArenaCorruptedError`` is different: it means an internal invariant broke
and is not meant to be recovered from.
"""

from enum import Enum, auto
from typing import Any


class ErrorKind(Enum):
    INVALID_ID = auto()
    FROM_ID_FAILED = auto()
    TO_ID_FAILED = auto()
    ID_OVERFLOW = auto()


class ArenaSetError(Exception):
    """Base class for recoverable interning errors."""
    kind: ErrorKind

    def __init__(self, message: str = '', id: Any = None):
        super().__init__(message or self.__class__.__doc__)
        self.id = id


class InvalidIdError(ArenaSetError, LookupError):
    """The ID was never issued, or its item has been disinterned."""
    kind = ErrorKind.INVALID_ID


class FromIdFailedError(ArenaSetError, ValueError):
    """Could not convert an ID into a slot index."""
    kind = ErrorKind.FROM_ID_FAILED


class ToIdFailedError(ArenaSetError, ValueError):
    """Could not convert a slot index into the configured ID type."""
    kind = ErrorKind.TO_ID_FAILED


class IdOverflowError(ArenaSetError, OverflowError):
    """The ID type cannot uniquely represent any more items."""
    kind = ErrorKind.ID_OVERFLOW


class ArenaCorruptedError(RuntimeError):
    """Internal slot bookkeeping is inconsistent (a bug, not a usage error)."""
