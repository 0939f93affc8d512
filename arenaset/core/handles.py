"""
Owning handles and dereferencing.

An arena stores *owned* values but keys its map on the *payload* those
values expose. ``deref`` peels one layer: objects that implement
``deref()`` return their target, everything else (``str``, ``bytes``,
tuples, ...) is its own payload.

``Shared`` is the handle type used by the stadium sets: several holders can
keep the same handle, and the payload is never copied.
"""

from typing import Any, Generic, TypeVar

T = TypeVar('T')


def deref(obj: Any) -> Any:
    """Return the target of ``obj``, or ``obj`` itself if it is a plain value."""
    method = getattr(type(obj), 'deref', None)
    if method is None:
        return obj
    return method(obj)


def deref2(obj: Any) -> Any:
    """Dereference twice: owned -> inner -> payload."""
    return deref(deref(obj))


class Shared(Generic[T]):
    """
    Immutable shared handle to a value.

    Equality and hashing follow the target, so two handles around equal
    values are interchangeable as keys.

    Usage:
        >>> h = Shared(b'abc')
        >>> h.deref()
        b'abc'
        >>> Shared(b'abc') == h
        True
    """

    __slots__ = ('_target',)

    def __init__(self, target: T):
        object.__setattr__(self, '_target', target)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def deref(self) -> T:
        return self._target

    def __eq__(self, other):
        if isinstance(other, Shared):
            return self._target == other._target
        return NotImplemented

    def __hash__(self):
        return hash(self._target)

    def __repr__(self):
        return f'Shared({self._target!r})'
