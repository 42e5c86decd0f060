"""A position map built from a linear-scan first level and Circuit ORAM levels."""

from __future__ import annotations

import random
from typing import Any

from obliv.circuit_oram import CircuitORAM
from obliv.heap_tree import DUMMY_POS
from obliv.linear_oram import LinearORAM, oblivious_read_update_index

__all__ = ["LEVEL_0_BUCKETS", "FAN_OUT", "RecursivePositionMap"]

#: Buckets held by the linear-scan first level.
LEVEL_0_BUCKETS = 128
#: Positions held by each internal node.
FAN_OUT = 16


def _is_power_of_two(value: int) -> bool:
    return value > 0 and value & (value - 1) == 0


class RecursivePositionMap:
    """Maps keys ``0..n-1`` to positions, hiding which key is accessed.

    The first level is a linear-scan ORAM of ``level0_buckets`` nodes; each
    further level is a Circuit ORAM whose nodes hold ``fan_out`` positions of
    the level below.
    """

    def __init__(
        self, n: int, level0_buckets: int = LEVEL_0_BUCKETS, fan_out: int = FAN_OUT
    ) -> None:
        if n <= 0:
            raise ValueError("n must be positive")
        if fan_out < 2 or not _is_power_of_two(fan_out):
            raise ValueError("fan_out must be a power of two of at least 2")
        if level0_buckets < 1:
            raise ValueError("level0_buckets must be positive")
        linear_map_size = level0_buckets * fan_out
        if not _is_power_of_two(linear_map_size):
            raise ValueError("level0_buckets * fan_out must be a power of two")

        self.n = n
        self._fan_out = fan_out
        self._level0_bits = linear_map_size.bit_length() - 1
        self._mask0 = linear_map_size - 1
        self._leveln_bits = fan_out.bit_length() - 1
        self._maskn = fan_out - 1
        self._rng = random.SystemRandom()
        dummy_node = (DUMMY_POS,) * fan_out

        l0_buckets = min(-(-n // fan_out), level0_buckets)
        h = 0
        if n > linear_map_size:
            quotient = n // linear_map_size
            while quotient >= fan_out:
                quotient //= fan_out
                h += 1
        if linear_map_size * fan_out**h < n:
            h += 1
        self.h = h

        curr = min(linear_map_size, n) * fan_out**h
        max_out_pos = min(curr, n)
        positions = [self._rng.randrange(max_out_pos) for _ in range(curr)]
        levels: list[CircuitORAM] = []
        for _ in range(h):
            curr //= fan_out
            values = [
                tuple(positions[j * fan_out : (j + 1) * fan_out]) for j in range(curr)
            ]
            positions = [self._rng.randrange(curr) for _ in range(curr)]
            levels.append(
                CircuitORAM.from_entries(curr, range(curr), values, positions, dummy_node)
            )
        levels.reverse()
        self.recursive_orams = levels

        self.linear_oram: LinearORAM[tuple[int, ...]] = LinearORAM(l0_buckets, dummy_node)
        for i in range(l0_buckets):
            chunk = positions[i * fan_out : min((i + 1) * fan_out, curr)]
            self.linear_oram.data[i] = tuple(chunk) + (DUMMY_POS,) * (fan_out - len(chunk))

    def __repr__(self) -> str:
        return f"RecursivePositionMap(n={self.n}, h={self.h})"

    def access_position(self, k: int, new_pos: int) -> int:
        """Set the position of key ``k`` to ``new_pos`` and return the old one."""
        if not 0 <= k < self.n:
            raise IndexError(f"key {k} outside 0..{self.n - 1}")
        if not 0 <= new_pos < self.n:
            raise ValueError(f"new_pos {new_pos} outside 0..{self.n - 1}")

        curr_max_pos = 1 << self._level0_bits
        curr_k = k & self._mask0
        k >>= self._level0_bits

        new_curr_pos = new_pos if self.h == 0 else self._rng.randrange(curr_max_pos)

        bucket_idx = curr_k >> self._leveln_bits
        bucket = list(self.linear_oram.read(bucket_idx))
        ret = oblivious_read_update_index(bucket, curr_k & self._maskn, new_curr_pos)
        self.linear_oram.write(bucket_idx, tuple(bucket))

        for i, oram in enumerate(self.recursive_orams):
            mask = k & self._maskn
            k >>= self._leveln_bits
            curr_max_pos <<= self._leveln_bits

            next_curr_pos = (
                new_pos if self.h == i + 1 else self._rng.randrange(curr_max_pos)
            )

            def _swap_entry(
                node: tuple[int, ...], slot: int = mask, nxt: int = next_curr_pos
            ) -> tuple[tuple[int, ...], Any]:
                entries = list(node)
                old = oblivious_read_update_index(entries, slot, nxt)
                return tuple(entries), old

            found, ret = oram.update(ret, new_curr_pos, curr_k, _swap_entry)
            if not found:
                raise RuntimeError("position map level lost an entry")
            new_curr_pos = next_curr_pos
            curr_k = (curr_k << self._leveln_bits) | mask

        return ret