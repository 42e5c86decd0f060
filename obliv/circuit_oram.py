"""Circuit ORAM: a tree ORAM with a small stash and one-pass evictions."""

from __future__ import annotations

import copy
from collections.abc import Callable, Sequence
from dataclasses import replace
from typing import Any, TypeVar

from obliv.block import (
    S,
    Z,
    Block,
    common_suffix_length,
    read_and_remove_element,
    read_path,
    remove_element,
    write_block_to_empty_slot,
    write_path,
)
from obliv.cmov import cmov, cxchg
from obliv.heap_tree import DUMMY_POS, HeapTree

R = TypeVar("R")

__all__ = ["EVICTIONS_PER_OP", "CircuitORAM"]

#: Deterministic evictions performed after every access.
EVICTIONS_PER_OP = 2

_MAX_BLOCKS = (1 << 32) - 1


class CircuitORAM:
    """Key-value ORAM over a binary tree of buckets with ``Z`` blocks each.

    Callers keep the position map: every access names the block's current
    position and the fresh position it moves to.

    The first ``S`` entries of :attr:`stash` are the stash proper; the rest
    hold the path being worked on during an access.
    """

    def __init__(self, max_n: int, default: Any = 0) -> None:
        if max_n <= 1:
            raise ValueError("max_n must be greater than 1")
        if max_n > _MAX_BLOCKS:
            raise ValueError(f"max_n must not exceed {_MAX_BLOCKS}")
        h0 = max_n.bit_length() - 1
        self.h = h0 + 2 if (1 << h0) < max_n else h0 + 1
        self.max_n = 1 << (self.h - 1)
        self._default = default
        self.tree: HeapTree[tuple[Block, ...]] = HeapTree(self.h, lambda: (Block(),) * Z)
        self.stash: list[Block] = [Block() for _ in range(S + self.h * Z)]
        self.evict_counter = 0

    @classmethod
    def from_entries(
        cls,
        max_n: int,
        keys: Sequence[int],
        values: Sequence[Any],
        positions: Sequence[int],
        default: Any = 0,
    ) -> CircuitORAM:
        """Build an ORAM holding ``keys[i] -> values[i]`` at ``positions[i]``."""
        if not len(keys) == len(values) == len(positions):
            raise ValueError("keys, values and positions must have the same length")
        if len(keys) > max_n:
            raise ValueError("more entries than max_n")
        oram = cls(max_n, default)
        for i, (key, value, pos) in enumerate(zip(keys, values, positions)):
            oram.write_or_insert(i, pos, key, value)
        return oram

    def __repr__(self) -> str:
        return f"CircuitORAM(max_n={self.max_n}, h={self.h})"

    def _check_pos(self, name: str, pos: int, allow_dummy: bool) -> None:
        if allow_dummy and pos == DUMMY_POS:
            return
        if not 0 <= pos < self.max_n:
            raise ValueError(f"{name} {pos} outside 0..{self.max_n - 1}")

    def read_path_and_get_nodes(self, pos: int) -> None:
        """Load the path to leaf ``pos`` into the tail of the stash."""
        self._check_pos("pos", pos, False)
        self.stash[S:] = read_path(self.tree, pos)

    def write_back_path(self, pos: int) -> None:
        """Store the tail of the stash back into the path to leaf ``pos``."""
        self._check_pos("pos", pos, False)
        write_path(self.tree, pos, self.stash[S:])

    def evict_once_fast(self, pos: int) -> None:
        """Push blocks as deep as they may go along the loaded path ``pos``."""
        h = self.h
        stash = self.stash
        deepest = [-1] * h
        deepest_idx = [0] * h
        target = [-1] * h
        has_empty = [False] * h

        # First pass: the deepest block reachable from each level.
        src = -1
        dst = -1
        for idx in range(S + Z):
            blk = stash[idx]
            level = common_suffix_length(blk.pos, pos)
            deeper = (not blk.is_empty()) & (level > dst)
            dst = cmov(dst, level, deeper)
            deepest_idx[0] = cmov(deepest_idx[0], idx, deeper)
        src = cmov(src, 0, dst != -1)

        idx = S + Z
        for i in range(1, h):
            deepest[i] = cmov(deepest[i], src, dst >= i)
            bucket_deepest = -1
            for _ in range(Z):
                blk = stash[idx]
                level = common_suffix_length(blk.pos, pos)
                empty = blk.is_empty()
                has_empty[i] = cmov(has_empty[i], True, empty)
                deeper = (not empty) & (level > bucket_deepest)
                bucket_deepest = cmov(bucket_deepest, level, deeper)
                deepest_idx[i] = cmov(deepest_idx[i], idx, deeper)
                idx += 1
            deeper_flag = bucket_deepest > dst
            src = cmov(src, i, deeper_flag)
            dst = cmov(dst, bucket_deepest, deeper_flag)

        # Second pass: where each level's block should land.
        src = -1
        dst = -1
        for i in range(h - 1, 0, -1):
            is_src = i == src
            target[i] = cmov(target[i], dst, is_src)
            src = cmov(src, -1, is_src)
            dst = cmov(dst, -1, is_src)
            change = (((dst == -1) & has_empty[i]) | (target[i] != -1)) & (deepest[i] != -1)
            src = cmov(src, deepest[i], change)
            dst = cmov(dst, i, change)
        target[0] = cmov(target[0], dst, src == 0)

        # Third pass: move the blocks.
        hold = Block()
        for idx in range(S + Z):
            take = (deepest_idx[0] == idx) & (target[0] != -1)
            blk = stash[idx]
            hold = cmov(hold, blk, take)
            stash[idx] = cmov(blk, replace(blk, pos=DUMMY_POS), take)
        dst = target[0]

        idx = S + Z
        for i in range(1, h - 1):
            has_target = target[i] != -1
            place_dummy = (i == dst) & (not has_target)
            for _ in range(Z):
                take = (deepest_idx[i] == idx) & has_target
                put = stash[idx].is_empty() & place_dummy
                hold, stash[idx] = cxchg(hold, stash[idx], take | put)
                idx += 1
            dst = cmov(dst, target[i], has_target | place_dummy)

        place_dummy = (h - 1) == dst
        written = False
        for _ in range(Z):
            put = stash[idx].is_empty() & place_dummy & (not written)
            written |= put
            stash[idx] = cmov(stash[idx], hold, put)
            idx += 1

    def _perform_eviction(self, pos: int) -> None:
        self.read_path_and_get_nodes(pos)
        self.evict_once_fast(pos)
        self.write_back_path(pos)

    def perform_deterministic_evictions(self) -> None:
        """Evict along the next paths in order; raise if the stash is full."""
        for _ in range(EVICTIONS_PER_OP):
            self._perform_eviction(self.evict_counter)
            self.evict_counter = (self.evict_counter + 1) % self.max_n
        has_room = False
        for blk in self.stash[:S]:
            has_room = cmov(has_room, True, blk.is_empty())
        if not has_room:
            raise RuntimeError("stash overflow")

    def _insert_into_stash(self, block: Block) -> None:
        head = self.stash[:S]
        if not write_block_to_empty_slot(head, block):
            raise RuntimeError("stash overflow")
        self.stash[:S] = head

    def _finish_access(self, pos: int) -> None:
        self.evict_once_fast(pos)
        self.write_back_path(pos)
        self.perform_deterministic_evictions()

    def read(self, pos: int, new_pos: int, key: int) -> tuple[bool, Any]:
        """Look up ``key`` and move it to ``new_pos``.

        Returns ``(found, value)``; ``value`` is ``None`` when not found.
        """
        self._check_pos("pos", pos, False)
        self._check_pos("new_pos", new_pos, True)
        self.read_path_and_get_nodes(pos)
        found, value = read_and_remove_element(self.stash, key)
        stored = cmov(self._default, value, found)
        self._insert_into_stash(
            Block(pos=cmov(new_pos, DUMMY_POS, not found), key=key, value=stored)
        )
        self._finish_access(pos)
        return found, value

    def write(self, pos: int, new_pos: int, key: int, value: Any) -> bool:
        """Overwrite ``key`` if present; return whether it was present."""
        self._check_pos("pos", pos, False)
        self._check_pos("new_pos", new_pos, False)
        self.read_path_and_get_nodes(pos)
        found = remove_element(self.stash, key)
        target_pos = cmov(DUMMY_POS, new_pos, found)
        self._insert_into_stash(Block(pos=target_pos, key=key, value=value))
        self._finish_access(pos)
        return found

    def write_or_insert(self, pos: int, new_pos: int, key: int, value: Any) -> bool:
        """Store ``value`` under ``key``; return whether the key was present."""
        self._check_pos("pos", pos, False)
        self._check_pos("new_pos", new_pos, True)
        self.read_path_and_get_nodes(pos)
        found = remove_element(self.stash, key)
        self._insert_into_stash(Block(pos=new_pos, key=key, value=value))
        self._finish_access(pos)
        return found

    def update(
        self,
        pos: int,
        new_pos: int,
        key: int,
        update_func: Callable[[Any], tuple[Any, R]],
    ) -> tuple[bool, R]:
        """Replace the value of ``key`` through ``update_func``.

        ``update_func`` receives the current value (the default when the key
        is absent) and returns ``(new_value, result)``. The key is stored with
        ``new_value`` whether or not it was present. Returns ``(found, result)``.
        """
        self._check_pos("pos", pos, False)
        self._check_pos("new_pos", new_pos, False)
        self.read_path_and_get_nodes(pos)
        found, current = read_and_remove_element(self.stash, key)
        current = cmov(copy.deepcopy(self._default), current, found)
        new_value, result = update_func(current)
        self._insert_into_stash(Block(pos=new_pos, key=key, value=new_value))
        self._finish_access(pos)
        return found, result