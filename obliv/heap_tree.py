"""A complete binary tree stored in a flat list, addressed by depth and path.

Nodes are laid out level by level. Within a level, a node is reached by the
low ``depth`` bits of a path, read least significant bit first::

                               0
                        1             2
                   3         5    4       6
    Path:          0         2    1       3
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")

__all__ = ["POSITION_BITS", "DUMMY_POS", "HeapTree"]

#: Width in bits of a leaf position.
POSITION_BITS = 32
#: The position that marks an empty slot.
DUMMY_POS = (1 << POSITION_BITS) - 1


class HeapTree(Generic[T]):
    """A binary tree of ``2**height - 1`` nodes; a one-node tree has height 1."""

    def __init__(self, height: int, factory: Callable[[], T]) -> None:
        if height < 0:
            raise ValueError("height must not be negative")
        self.height = height
        self.tree: list[T] = [factory() for _ in range((1 << height) - 1)]

    def __len__(self) -> int:
        return len(self.tree)

    def get_index(self, depth: int, path: int) -> int:
        """Return the list index of the node at ``depth`` on ``path``."""
        if not 0 <= depth < self.height:
            raise IndexError(f"depth {depth} outside a tree of height {self.height}")
        level_offset = (1 << depth) - 1
        return level_offset + (path & level_offset)

    def get_path_at_depth(self, depth: int, path: int) -> T:
        """Return the node at ``depth`` on ``path``."""
        return self.tree[self.get_index(depth, path)]

    def set_path_at_depth(self, depth: int, path: int, value: T) -> None:
        """Replace the node at ``depth`` on ``path`` with ``value``."""
        self.tree[self.get_index(depth, path)] = value

    def get_sibling(self, depth: int, path: int) -> T:
        """Return the other child of the parent of the node at ``depth`` on ``path``."""
        if depth < 1:
            raise ValueError("the root has no sibling")
        return self.get_path_at_depth(depth, path ^ (1 << (depth - 1)))