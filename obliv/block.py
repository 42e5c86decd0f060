"""Blocks held by tree ORAMs and the scans that move them."""

from __future__ import annotations

from collections.abc import MutableSequence, Sequence
from dataclasses import dataclass, replace
from typing import Any

from obliv.cmov import cmov
from obliv.heap_tree import DUMMY_POS, POSITION_BITS, HeapTree

__all__ = [
    "Z",
    "S",
    "Block",
    "read_and_remove_element",
    "remove_element",
    "write_block_to_empty_slot",
    "reverse_bits",
    "common_suffix_length",
    "read_path",
    "write_path",
]

#: Blocks per bucket.
Z = 2
#: Stash size.
S = 20

_POSITION_MASK = (1 << POSITION_BITS) - 1


@dataclass(frozen=True)
class Block:
    """A slot in the tree; it is empty when ``pos`` is ``DUMMY_POS``.

    The key and value of an empty block carry no meaning.
    """

    pos: int = DUMMY_POS
    key: int = 0
    value: Any = 0

    def is_empty(self) -> bool:
        """Return whether the block holds nothing."""
        return self.pos == DUMMY_POS

    def __str__(self) -> str:
        if self.is_empty():
            return "."
        return f"Block {{ pos: {self.pos}, key: {self.key}, value: {self.value!r} }}"


def read_and_remove_element(arr: MutableSequence[Block], key: int) -> tuple[bool, Any]:
    """Empty the block holding ``key`` and return ``(found, value)``.

    ``value`` is ``None`` when nothing was found. At most one block may match.
    """
    found = False
    value: Any = None
    for i, item in enumerate(arr):
        matched = (not item.is_empty()) & (item.key == key)
        value = cmov(value, item.value, matched)
        arr[i] = cmov(item, replace(item, pos=DUMMY_POS), matched)
        found = cmov(found, True, matched)
    return found, value


def remove_element(arr: MutableSequence[Block], key: int) -> bool:
    """Empty the block holding ``key``; return whether there was one."""
    found = False
    for i, item in enumerate(arr):
        matched = (not item.is_empty()) & (item.key == key)
        arr[i] = cmov(item, replace(item, pos=DUMMY_POS), matched)
        found = cmov(found, True, matched)
    return found


def write_block_to_empty_slot(arr: MutableSequence[Block], block: Block) -> bool:
    """Put ``block`` into the first empty slot; return ``False`` if there is none."""
    written = False
    for i, item in enumerate(arr):
        matched = item.is_empty() & (not written)
        arr[i] = cmov(item, block, matched)
        written = cmov(written, True, matched)
    return written


def reverse_bits(n: int, bits: int) -> int:
    """Reverse the lowest ``bits`` bits of ``n``."""
    result = 0
    value = n
    for _ in range(bits):
        result = (result << 1) | (value & 1)
        value >>= 1
    return result


def common_suffix_length(a: int, b: int) -> int:
    """Count the low bits that two positions share."""
    w = ((a ^ b) & _POSITION_MASK) | (1 << POSITION_BITS)
    return (w & -w).bit_length() - 1


def _check_path(tree: HeapTree[Any], path: int) -> None:
    if not 0 <= path < (1 << tree.height):
        raise ValueError(f"path {path} outside a tree of height {tree.height}")


def read_path(tree: HeapTree[Sequence[Block]], path: int) -> list[Block]:
    """Return the blocks on ``path``, root bucket first."""
    _check_path(tree, path)
    blocks: list[Block] = []
    for depth in range(tree.height):
        blocks.extend(tree.get_path_at_depth(depth, path))
    return blocks


def write_path(tree: HeapTree[Sequence[Block]], path: int, blocks: Sequence[Block]) -> None:
    """Store ``blocks``, root bucket first, into the buckets on ``path``."""
    _check_path(tree, path)
    if len(blocks) != tree.height * Z:
        raise ValueError(f"expected {tree.height * Z} blocks, got {len(blocks)}")
    for depth in range(tree.height):
        tree.set_path_at_depth(depth, path, tuple(blocks[depth * Z : (depth + 1) * Z]))