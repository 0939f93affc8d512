"""
Bounded ID Types
================

IDs handed out by an ArenaSet are instances of an ``InternId`` subclass.
Each subclass is a bounded integer domain described by a numpy integer
dtype and an inclusive ``[min_value, max_value]`` range, which defaults to
the full range of the dtype (``numpy.iinfo``).

A slot index ``i`` is encoded as ``min_value + i``, so an ID type with
``k`` representable values can address exactly ``k`` slots, regardless of
whether the underlying dtype is signed:

    >>> Small = custom_intern_id('Small', np.uint8, 0, 3)
    >>> Small.span()
    3
    >>> Small.from_index(2)
    Small(2)
    >>> Small.to_index(Small(2))
    2

IDs compare and hash like plain ints, so ``p.intern('a') == 0`` holds. IDs
of a *different* ID type are rejected when decoding, which keeps separate
domains from being mixed up by accident.

Large ID populations can be stored compactly with ``as_array`` and
renumbered after ``ArenaSet.shrink`` with ``apply_remap``.
"""

import operator
from typing import Any, Iterable, Optional, Type

import numpy as np

from .errors import FromIdFailedError, InvalidIdError, ToIdFailedError


class InternId(int):
    """
    Integer ID bounded to ``[min_value, max_value]``.

    Subclasses override ``dtype``, ``min_value`` and ``max_value``; use
    ``custom_intern_id`` rather than subclassing by hand.
    """

    __slots__ = ()

    dtype: np.dtype = np.dtype(np.uintp)
    min_value: int = int(np.iinfo(np.uintp).min)
    max_value: int = int(np.iinfo(np.uintp).max)

    def __new__(cls, value=0):
        value = operator.index(value)
        if not cls.min_value <= value <= cls.max_value:
            raise ToIdFailedError(
                f"{value} out of range [{cls.min_value}, {cls.max_value}] "
                f"for {cls.__name__}",
                id=value,
            )
        return super().__new__(cls, value)

    def __repr__(self):
        return f'{type(self).__name__}({int(self)})'

    def __str__(self):
        return str(int(self))

    @classmethod
    def span(cls) -> int:
        """Largest slot index this type can encode."""
        return cls.max_value - cls.min_value

    @classmethod
    def from_index(cls, index: int) -> 'InternId':
        """Encode a slot index; raises ToIdFailedError if it does not fit."""
        if index < 0 or index > cls.span():
            raise ToIdFailedError(
                f"index {index} cannot be represented as {cls.__name__} "
                f"[{cls.min_value}, {cls.max_value}]"
            )
        return cls(cls.min_value + index)

    @classmethod
    def to_index(cls, id: Any) -> int:
        """Decode an ID (or plain integer) into a slot index."""
        if isinstance(id, InternId) and not isinstance(id, cls):
            raise FromIdFailedError(
                f"{id!r} is not a {cls.__name__}", id=id
            )
        try:
            value = operator.index(id)
        except TypeError:
            raise FromIdFailedError(f"{id!r} is not an integer ID", id=id) from None
        if not cls.min_value <= value <= cls.max_value:
            raise FromIdFailedError(
                f"{value} is outside {cls.__name__} "
                f"[{cls.min_value}, {cls.max_value}]",
                id=id,
            )
        return value - cls.min_value

    @classmethod
    def as_array(cls, ids: Iterable[Any]) -> np.ndarray:
        """Pack IDs into a numpy array of this type's dtype; out-of-range values raise ToIdFailedError."""
        return np.fromiter((int(cls(i)) for i in ids), dtype=cls.dtype)


def custom_intern_id(
    name: str,
    base: Any = np.uintp,
    min_value: Optional[int] = None,
    max_value: Optional[int] = None,
    module: Optional[str] = None,
) -> Type[InternId]:
    """
    Declare a bounded ID type.

    Args:
        name: Class name of the new ID type.
        base: numpy integer dtype (or anything ``np.dtype`` accepts).
        min_value: Smallest ID; defaults to the dtype minimum.
        max_value: Largest ID; defaults to the dtype maximum.
        module: Value for the new class's ``__module__``.

    Usage:
        >>> Small = custom_intern_id('Small', np.uint8, 0, 3)
        >>> p = ArenaSet(id_type=Small)
    """
    dtype = np.dtype(base)
    if dtype.kind not in 'iu':
        raise TypeError(f"ID base must be an integer dtype, got {dtype}")
    info = np.iinfo(dtype)
    lo = int(info.min) if min_value is None else operator.index(min_value)
    hi = int(info.max) if max_value is None else operator.index(max_value)
    if lo < info.min or hi > info.max:
        raise ValueError(
            f"bounds [{lo}, {hi}] exceed {dtype} range [{info.min}, {info.max}]"
        )
    if lo > hi:
        raise ValueError(f"min_value {lo} is greater than max_value {hi}")

    namespace = {
        '__slots__': (),
        'dtype': dtype,
        'min_value': lo,
        'max_value': hi,
        '__module__': module or __name__,
    }
    return type(name, (InternId,), namespace)


Index = custom_intern_id('Index', np.uintp)
U8 = custom_intern_id('U8', np.uint8)
U16 = custom_intern_id('U16', np.uint16)
U32 = custom_intern_id('U32', np.uint32)
U64 = custom_intern_id('U64', np.uint64)


def apply_remap(
    remap,
    ids: Any,
    id_type: Type[InternId] = Index,
    fill: Optional[int] = None,
) -> np.ndarray:
    """
    Renumber an array of IDs with the mapping returned by ``shrink``.

    IDs absent from ``remap`` (dropped or previously disinterned) become
    ``fill``; when ``fill`` is None they raise InvalidIdError instead.
    The result has the shape of ``ids`` and the dtype of ``id_type``.
    """
    shape = np.shape(ids)
    flat = id_type.as_array(np.ravel(ids).tolist())

    pairs = sorted(remap.items())
    old = id_type.as_array(k for k, _ in pairs)
    new = id_type.as_array(v for _, v in pairs)

    if len(old):
        pos = np.searchsorted(old, flat)
        clipped = np.minimum(pos, len(old) - 1)
        found = (pos < len(old)) & (old[clipped] == flat)
        mapped = new[clipped]
    else:
        found = np.zeros(flat.shape, dtype=bool)
        mapped = np.zeros(flat.shape, dtype=id_type.dtype)

    if not found.all():
        if fill is None:
            missing = int(flat[~found][0])
            raise InvalidIdError(f"ID {missing} has no entry in the remap", id=missing)
        mapped = np.where(found, mapped, id_type.dtype.type(fill))

    return mapped.astype(id_type.dtype, copy=False).reshape(shape)
