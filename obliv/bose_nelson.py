"""Bose-Nelson sorting network."""

from __future__ import annotations

import warnings
from collections.abc import MutableSequence
from typing import Any

from obliv.cmov import cswap_index

__all__ = ["bn_merge", "bn_sort", "bose_nelson_sort"]


def _compare_exchange(arr: MutableSequence[Any], i: int, j: int) -> None:
    cswap_index(arr, i, j, arr[i] > arr[j])


def bn_merge(
    arr: MutableSequence[Any], start1: int, size1: int, start2: int, size2: int
) -> None:
    """Merge the sorted runs ``arr[start1:start1+size1]`` and ``arr[start2:start2+size2]``."""
    if start1 + size1 > start2:
        raise ValueError("first run must end before the second begins")
    if start2 + size2 > len(arr):
        raise ValueError("second run extends past the end of the sequence")
    if size1 == 1 and size2 == 1:
        _compare_exchange(arr, start1, start2)
    elif size1 == 1 and size2 == 2:
        _compare_exchange(arr, start1, start2 + 1)
        _compare_exchange(arr, start1, start2)
    elif size1 == 2 and size2 == 1:
        _compare_exchange(arr, start1, start2)
        _compare_exchange(arr, start1 + 1, start2)
    else:
        s1 = size1 // 2
        s2 = -(-size2 // 2) if size1 % 2 == 0 else size2 // 2
        bn_merge(arr, start1, s1, start2, s2)
        bn_merge(arr, start1 + s1, size1 - s1, start2 + s2, size2 - s2)
        bn_merge(arr, start1 + s1, size1 - s1, start2, s2)


def bn_sort(arr: MutableSequence[Any], start: int, size: int) -> None:
    """Sort ``arr[start:start+size]`` in place with the Bose-Nelson network."""
    if size <= 1:
        return
    half = size // 2
    bn_sort(arr, start, half)
    bn_sort(arr, start + half, size - half)
    bn_merge(arr, start, half, start + half, size - half)


def bose_nelson_sort(arr: MutableSequence[Any]) -> None:
    """Sort ``arr`` in place with the Bose-Nelson network.

    Deprecated: :func:`obliv.bitonic.bitonic_sort` is faster.
    """
    warnings.warn(
        "bose_nelson_sort is deprecated, use bitonic_sort instead",
        DeprecationWarning,
        stacklevel=2,
    )
    bn_sort(arr, 0, len(arr))