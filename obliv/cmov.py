"""Conditional move and exchange primitives.

Every operation here evaluates both candidates and picks one by the
condition, rather than branching on it. Integers are blended with a bit
mask. Other values are picked by indexing a pair with the condition.
"""

from __future__ import annotations

from collections.abc import MutableSequence
from typing import Any, TypeVar

T = TypeVar("T")

__all__ = ["cmov", "cxchg", "cset", "cswap_index"]


def _is_plain_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def cmov(current: T, other: T, choice: bool) -> T:
    """Return ``other`` if ``choice`` is true, otherwise ``current``."""
    flag = int(bool(choice))
    if _is_plain_int(current) and _is_plain_int(other):
        mask = -flag
        return current ^ ((current ^ other) & mask)  # type: ignore[operator,return-value]
    return (current, other)[flag]


def cxchg(first: T, second: T, choice: bool) -> tuple[T, T]:
    """Return the pair swapped if ``choice`` is true, unchanged otherwise."""
    new_first = cmov(first, second, choice)
    new_second = cmov(second, first, choice)
    return new_first, new_second


def cset(val_false: T, val_true: T, choice: bool) -> T:
    """Return ``val_true`` if ``choice`` is true, otherwise ``val_false``."""
    result = cmov(val_false, val_true, choice)
    return cmov(result, val_false, not choice)


def cswap_index(seq: MutableSequence[Any], i: int, j: int, choice: bool) -> None:
    """Swap ``seq[i]`` and ``seq[j]`` in place if ``choice`` is true."""
    left, right = cxchg(seq[i], seq[j], choice)
    seq[i] = left
    seq[j] = right