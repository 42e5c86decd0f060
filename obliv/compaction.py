"""Stable oblivious compaction."""

from __future__ import annotations

from collections.abc import Callable, MutableSequence
from typing import Any

from obliv.cmov import cmov, cswap_index

__all__ = ["compact"]


def compact(arr: MutableSequence[Any], is_dummy: Callable[[Any], bool]) -> int:
    """Move the non-dummy elements of ``arr`` to its front, keeping their order.

    Returns the number of non-dummy elements; the elements after them are the
    dummies. The access pattern depends only on ``len(arr)``.
    """
    n = len(arr)
    if n == 0:
        return 0
    rounds = (n - 1).bit_length()

    # csum[i]: how many dummies precede a real element at i (0 for dummies).
    csum = [0] * n
    dummy_count = cmov(0, 1, is_dummy(arr[0]))
    for i in range(1, n):
        pred = bool(is_dummy(arr[i]))
        dummy_count = cmov(dummy_count, dummy_count + 1, pred)
        csum[i] = cmov(0, dummy_count, not pred)
    real_count = n - dummy_count

    for level in range(rounds):
        offset = 1 << level
        for a in range(n - offset):
            b = a + offset
            pred = (csum[b] & offset) != 0
            cswap_index(arr, a, b, pred)
            csum[a] = cmov(csum[a], csum[b] - offset, pred)
            csum[b] = cmov(csum[b], 0, pred)

    return real_count