# obliv

Building blocks for oblivious computation in pure Python. The algorithms choose
between values with conditional moves rather than branches. The sorting,
compaction and scanning routines visit positions in an order that depends only
on the size of their input. This is not the data they hold.

## Contents

- `obliv.cmov` provides the conditional move primitives:
  - `cmov(current, other, choice)` returns one of its two values.
  - `cxchg(first, second, choice)` returns the pair, swapped or not.
  - `cset(val_false, val_true, choice)` returns one of its two values.
  - `cswap_index(seq, i, j, choice)` swaps two elements of a list in place.
- `obliv.bitonic` provides `bitonic_sort(arr)`, which sorts in place and is the
  recommended sorter. It also provides `get_strictly_bigger_power_of_two(size)`.
- `obliv.batcher` provides `batcher_sort(arr)` and `batcher_sort_paper(arr)`,
  Batcher's odd–even merge network. Both emit a `DeprecationWarning`.
- `obliv.bose_nelson` provides `bose_nelson_sort(arr)` and the building blocks
  `bn_sort` and `bn_merge`. `bose_nelson_sort` emits a `DeprecationWarning`,
  and `bn_merge` raises `ValueError` for runs that overlap or overrun.
- `obliv.compaction` provides `compact(arr, is_dummy)`. It moves the
  non-dummy elements to the front and keeps their order. It returns how many
  non-dummy elements there are.
- `obliv.shuffle` provides `shuffle(arr)`. It tags each element with a random
  64-bit key from `secrets` and sorts on the tags with `bitonic_sort`, which
  gives a random permutation in place.
- `obliv.heap_tree` provides `HeapTree(height, factory)`, a complete binary
  tree stored in a flat list and addressed by depth and path. It also defines
  `DUMMY_POS` (`2**32 - 1`) and `POSITION_BITS`.
- `obliv.linear_oram` provides `LinearORAM(max_n, default)`. Its `read`,
  `write` and `read_update` scan every slot. The module also has the helpers
  `oblivious_read_index`, `oblivious_write_index` and
  `oblivious_read_update_index`.
- `obliv.block` provides `Block`, which holds a position, a key and a value and
  is empty when its position is `DUMMY_POS`. It also provides the stash and
  path helpers used by Circuit ORAM, with the constants `Z` (blocks per bucket)
  and `S` (stash size).
- `obliv.circuit_oram` provides `CircuitORAM(max_n, default)`, a tree ORAM with
  two deterministic evictions after every access. The caller keeps the
  position map. It supplies each key's current position and a fresh position
  on every access.
- `obliv.recursive_oram` provides `RecursivePositionMap(n, level0_buckets,
  fan_out)`, a position map for keys `0..n-1`. Its first level is a linear-scan
  array and its further levels are Circuit ORAMs.
- `obliv.ooption` provides `OOption`, a value paired with an `is_some` flag. It
  has `unwrap`, `unwrap_or_default`, and in-place `cmov` and `cxchg`.
- `obliv.pagestore` provides the abstract `PageStorage` interface and
  `MemStore`, an in-memory store of 4096-byte pages guarded by a lock.

## Installation

```
pip install .
```

## Examples

Sort with a network:

```python
from obliv.bitonic import bitonic_sort

data = [5, 3, 9, 1]
bitonic_sort(data)          # sorts in place
assert data == [1, 3, 5, 9]
```

Compact and keep the order of the real elements:

```python
from obliv.compaction import compact

arr = [1, 2, 3, 4, 5]
n = compact(arr, lambda x: x % 2 == 0)
assert n == 3
assert arr[:n] == [1, 3, 5]
```

Use a Circuit ORAM:

```python
from obliv.circuit_oram import CircuitORAM

oram = CircuitORAM(16, 0)
oram.write_or_insert(0, 3, 7, 42)      # key 7 now lives at position 3
found, value = oram.read(3, 5, 7)      # move key 7 to position 5
assert found and value == 42

# update_func gets the current value and returns (new_value, result)
found, old = oram.update(5, 2, 7, lambda v: (v + 1, v))
assert found and old == 42
```

If the stash fills up, `read`, `write`, `write_or_insert` and `update` raise
`RuntimeError("stash overflow")`. A position outside `0..max_n-1` raises
`ValueError`.

Use a position map:

```python
from obliv.recursive_oram import RecursivePositionMap

pmap = RecursivePositionMap(1000)
pmap.access_position(10, 123)
assert pmap.access_position(10, 7) == 123
```

Store pages:

```python
from obliv.pagestore import MemStore

store = MemStore.open("scratch", 2)
store.write_page(1, bytes(range(256)) * 16)
assert store.read_page(1)[:3] == b"\x00\x01\x02"
assert store.pages_len() == 2
```

## Limitations

- The only page store is `MemStore`, which keeps every page in memory. Nothing
  persists pages to disk. The `key` given to `MemStore.open` is ignored.
- The package is a library. It has no command-line program.
- The constant-pattern behaviour is limited to the order of operations. Python
  itself gives no timing guarantees.

## Running the tests

```
pip install .[test]
pytest
```