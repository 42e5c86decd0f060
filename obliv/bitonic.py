"""Bitonic sorting network for sequences of any length."""

from __future__ import annotations

from collections.abc import MutableSequence
from typing import Any

from obliv.cmov import cswap_index

__all__ = ["get_strictly_bigger_power_of_two", "bitonic_sort"]


def get_strictly_bigger_power_of_two(size: int) -> int:
    """Return the smallest power of two strictly greater than ``size``."""
    n = 1
    while n <= size:
        n *= 2
    return n


def _trailing_zeros(value: int) -> int:
    return (value & -value).bit_length() - 1


def _compare_exchange(arr: MutableSequence[Any], i: int, j: int, ascending: bool) -> None:
    cswap_index(arr, i, j, (arr[i] > arr[j]) == ascending)


def _merge_pow2(arr: MutableSequence[Any], start: int, size: int, ascending: bool) -> None:
    for level in range(_trailing_zeros(size)):
        half = size >> (level + 1)
        for block in range(1 << level):
            first = start + 2 * block * half
            for i in range(first, first + half):
                _compare_exchange(arr, i, i + half, ascending)


def _merge(arr: MutableSequence[Any], start: int, size: int, ascending: bool) -> None:
    if size <= 1:
        return
    half = get_strictly_bigger_power_of_two(size) // 2
    for i in range(start, start + (size - half)):
        _compare_exchange(arr, i, i + half, ascending)
    _merge_pow2(arr, start, half, ascending)
    _merge(arr, start + half, size - half, ascending)


def _sort(arr: MutableSequence[Any], start: int, size: int, ascending: bool) -> None:
    if size <= 1:
        return
    half = size // 2
    _sort(arr, start, half, not ascending)
    _sort(arr, start + half, size - half, ascending)
    _merge(arr, start, size, ascending)


def bitonic_sort(arr: MutableSequence[Any]) -> None:
    """Sort ``arr`` in place in ascending order.

    The sequence of compare-exchange positions depends only on ``len(arr)``.
    """
    _sort(arr, 0, len(arr), True)