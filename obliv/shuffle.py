"""Random shuffle by tagging with random keys and sorting."""

from __future__ import annotations

import secrets
from collections.abc import MutableSequence
from dataclasses import dataclass, field
from typing import Any

from obliv.bitonic import bitonic_sort

__all__ = ["shuffle"]


@dataclass(order=True)
class _Tagged:
    random_key: int
    value: Any = field(compare=False)


def shuffle(arr: MutableSequence[Any]) -> None:
    """Randomly permute ``arr`` in place through an oblivious sort on random tags."""
    tagged = [_Tagged(secrets.randbits(64), item) for item in arr]
    bitonic_sort(tagged)
    for i, entry in enumerate(tagged):
        arr[i] = entry.value