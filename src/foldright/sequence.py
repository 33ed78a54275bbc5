"""
Array-like sequences with optional holes.

A fold walks indices ``0..length-1`` of a container and must tell an absent
index apart from an index holding ``None``. Two shapes are accepted:

1. Any ``collections.abc.Sequence`` other than text and bytes. Such
   containers are dense: every index below ``len()`` is present.
2. Any object with a ``length`` attribute that answers ``index in obj`` and
   ``obj[index]``. ``SparseSequence`` is the shipped implementation.
"""

from __future__ import annotations

import math
import numbers
from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")

MAX_LENGTH = 2**32 - 1

_TEXT_TYPES = (str, bytes, bytearray)


@runtime_checkable
class ArrayLike(Protocol[T]):
    """Indexable container exposing a ``length`` and a presence query."""

    length: Any

    def __contains__(self, index: object) -> bool: ...

    def __getitem__(self, index: int) -> T: ...


class _Hole:
    _instance: _Hole | None = None

    def __new__(cls) -> _Hole:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "<hole>"

    def __bool__(self) -> bool:
        return False


HOLE = _Hole()


def to_length(value: Any) -> int:
    """
    Coerce a raw ``length`` into the range ``[0, 2**32 - 1]``.

    Anything that is not a real number, and any NaN or infinity, yields 0.
    Finite numbers are truncated toward zero, negatives clamp to 0 and the
    result wraps modulo ``2**32``.
    """
    if isinstance(value, bool):
        value = int(value)
    if isinstance(value, int):
        n = value
    elif isinstance(value, numbers.Real):
        f = float(value)
        if not math.isfinite(f):
            return 0
        n = math.trunc(f)
    else:
        return 0
    if n < 0:
        return 0
    return n % (MAX_LENGTH + 1)


def is_array_like(obj: Any) -> bool:
    if isinstance(obj, _TEXT_TYPES):
        return False
    if isinstance(obj, Sequence):
        return True
    cls = type(obj)
    return (
        hasattr(obj, "length")
        and hasattr(cls, "__contains__")
        and hasattr(cls, "__getitem__")
    )


def length_of(seq: Any) -> int:
    """Coerced length of an array-like container."""
    if isinstance(seq, Sequence):
        return to_length(len(seq))
    return to_length(seq.length)


def has_index(seq: Any, index: int) -> bool:
    """Whether ``index`` is populated in ``seq``. Holes answer False."""
    if index < 0:
        return False
    if isinstance(seq, Sequence):
        return index < len(seq)
    return index in seq


class SparseSequence(Generic[T]):
    """
    Fixed-length sequence where some indices may be absent.

    Example:
        seq = SparseSequence(4, {0: "a", 3: "d"})
        assert 0 in seq and 1 not in seq
        assert seq[3] == "d"

        seq = SparseSequence.from_iterable(["a", HOLE, None])
        assert 1 not in seq and 2 in seq  # None is a value, not a hole
    """

    def __init__(self, length: int, items: Mapping[int, T] | None = None):
        """
        Args:
            length: Number of index slots, present or not.
            items: Populated indices mapped to their elements.
        """
        if isinstance(length, bool) or not isinstance(length, int):
            raise TypeError(f"length must be an int, got {type(length).__name__}")
        if not 0 <= length <= MAX_LENGTH:
            raise ValueError(f"length {length} outside [0, {MAX_LENGTH}]")
        self._length = length
        self._items: dict[int, T] = {}
        for index, value in (items or {}).items():
            if isinstance(index, bool) or not isinstance(index, int):
                raise ValueError(f"index {index!r} is not an int")
            if not 0 <= index < length:
                raise ValueError(f"index {index} outside [0, {length})")
            self._items[index] = value

    @classmethod
    def from_iterable(cls, iterable: Iterable[Any], hole: Any = HOLE) -> SparseSequence[Any]:
        """Build from an iterable, turning every ``hole`` marker into an absent index."""
        items: dict[int, Any] = {}
        length = 0
        for index, value in enumerate(iterable):
            if value is not hole:
                items[index] = value
            length = index + 1
        return cls(length, items)

    @property
    def length(self) -> int:
        return self._length

    def __len__(self) -> int:
        return self._length

    def __contains__(self, index: object) -> bool:
        return index in self._items

    def __getitem__(self, index: int) -> T:
        try:
            return self._items[index]
        except KeyError:
            raise IndexError(f"index {index} is not populated") from None

    def __iter__(self) -> Iterator[T]:
        """Present elements in ascending index order."""
        for index in self.indices():
            yield self._items[index]

    def indices(self) -> list[int]:
        return sorted(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SparseSequence):
            return NotImplemented
        return self._length == other._length and self._items == other._items

    def __repr__(self) -> str:
        slots = ", ".join(
            repr(self._items[i]) if i in self._items else "<hole>"
            for i in range(min(self._length, 10))
        )
        if self._length > 10:
            slots += ", ..."
        return f"SparseSequence([{slots}])"


__all__ = [
    "ArrayLike",
    "HOLE",
    "MAX_LENGTH",
    "SparseSequence",
    "has_index",
    "is_array_like",
    "length_of",
    "to_length",
]
