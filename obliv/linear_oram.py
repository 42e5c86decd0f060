"""An ORAM that touches every slot on each access."""

from __future__ import annotations

from collections.abc import MutableSequence, Sequence
from typing import Any, Generic, TypeVar

from obliv.cmov import cmov

T = TypeVar("T")

__all__ = [
    "oblivious_read_update_index",
    "oblivious_read_index",
    "oblivious_write_index",
    "LinearORAM",
]


def _check_index(data: Sequence[Any], index: int) -> None:
    if not 0 <= index < len(data):
        raise IndexError(f"index {index} out of range for length {len(data)}")


def oblivious_read_update_index(data: MutableSequence[T], index: int, value: T) -> T:
    """Replace ``data[index]`` with ``value`` and return the old element."""
    _check_index(data, index)
    old: Any = None
    for i, item in enumerate(data):
        choice = i == index
        old = cmov(old, item, choice)
        data[i] = cmov(item, value, choice)
    return old


def oblivious_read_index(data: Sequence[T], index: int, default: T) -> T:
    """Return ``data[index]``, scanning every element."""
    _check_index(data, index)
    out = default
    for i, item in enumerate(data):
        out = cmov(out, item, i == index)
    return out


def oblivious_write_index(data: MutableSequence[T], index: int, value: T) -> None:
    """Set ``data[index]`` to ``value``, scanning every element."""
    _check_index(data, index)
    for i, item in enumerate(data):
        data[i] = cmov(item, value, i == index)


class LinearORAM(Generic[T]):
    """Fixed-size array whose reads and writes scan all slots."""

    def __init__(self, max_n: int, default: Any = 0) -> None:
        if max_n < 0:
            raise ValueError("max_n must not be negative")
        self._default = default
        self.data: list[T] = [default] * max_n

    def __len__(self) -> int:
        return len(self.data)

    def read(self, index: int) -> T:
        """Return the element at ``index``."""
        return oblivious_read_index(self.data, index, self._default)

    def write(self, index: int, value: T) -> None:
        """Store ``value`` at ``index``; an index outside the array changes nothing."""
        for i, item in enumerate(self.data):
            self.data[i] = cmov(item, value, i == index)

    def read_update(self, index: int, value: T) -> T:
        """Store ``value`` at ``index`` and return what was there."""
        return oblivious_read_update_index(self.data, index, value)