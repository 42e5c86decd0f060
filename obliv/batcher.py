"""Batcher odd-even merge sorting network."""

from __future__ import annotations

import warnings
from collections.abc import MutableSequence
from typing import Any

from obliv.cmov import cswap_index

__all__ = ["batcher_sort_paper", "batcher_sort"]


def _sort_paper(arr: MutableSequence[Any]) -> None:
    n = len(arr)
    p = 1
    while p < n:
        k = p
        while k > 0:
            j = k % p
            while j < n - k:
                for i in range(min(k, n - j - k)):
                    if (i + j) // (p * 2) == (i + j + k) // (p * 2):
                        a, b = i + j, i + j + k
                        cswap_index(arr, a, b, arr[a] > arr[b])
                j += 2 * k
            k //= 2
        p *= 2


def batcher_sort_paper(arr: MutableSequence[Any]) -> None:
    """Sort ``arr`` in place with the odd-even merge network as first published.

    Deprecated: :func:`obliv.bitonic.bitonic_sort` is faster.
    """
    warnings.warn(
        "batcher_sort_paper is deprecated, use bitonic_sort instead",
        DeprecationWarning,
        stacklevel=2,
    )
    _sort_paper(arr)


def batcher_sort(arr: MutableSequence[Any]) -> None:
    """Sort ``arr`` in place with Batcher's odd-even merge network.

    Deprecated: :func:`obliv.bitonic.bitonic_sort` is faster.
    """
    warnings.warn(
        "batcher_sort is deprecated, use bitonic_sort instead",
        DeprecationWarning,
        stacklevel=2,
    )
    _sort_paper(arr)