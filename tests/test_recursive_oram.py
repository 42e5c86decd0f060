import random

import pytest

from obliv.recursive_oram import RecursivePositionMap

LEVEL_0_BUCKETS = 8
FAN_OUT = 8
LINEAR_MAP_SIZE = LEVEL_0_BUCKETS * FAN_OUT


def _make(n):
    return RecursivePositionMap(n, LEVEL_0_BUCKETS, FAN_OUT)


def test_recursive_position_map_small():
    n = LINEAR_MAP_SIZE // 2 + 1
    pos_map = _make(n)
    assert pos_map.h == 0
    assert len(pos_map.linear_oram.data) == -(-n // FAN_OUT)
    for i in range(n):
        pos_map.access_position(i, i)
    for i in range(n):
        assert pos_map.access_position(i, i) == i


def test_recursive_position_map_onelevel():
    n = LINEAR_MAP_SIZE * FAN_OUT
    pos_map = _make(n)
    assert pos_map.h == 1
    assert len(pos_map.linear_oram.data) == LEVEL_0_BUCKETS
    for i in range(n):
        pos_map.access_position(i, i)
    for i in range(n):
        assert pos_map.access_position(i, i) == i


@pytest.mark.parametrize(
    "total_keys, rounds",
    [
        (LINEAR_MAP_SIZE // 2 + 1, 2000),
        (LINEAR_MAP_SIZE, 2000),
        (LINEAR_MAP_SIZE * FAN_OUT, 2000),
        (LINEAR_MAP_SIZE * FAN_OUT * FAN_OUT, 1000),
    ],
)
def test_recursive_position_map_multiple(total_keys, rounds):
    pos_map = _make(total_keys)
    rng = random.Random(total_keys)
    pmap = [0] * total_keys
    used = [False] * total_keys
    for _ in range(rounds):
        k = rng.randrange(total_keys)
        new_pos = rng.randrange(total_keys)
        old_pos = pos_map.access_position(k, new_pos)
        assert 0 <= old_pos < total_keys
        if used[k]:
            assert old_pos == pmap[k]
        pmap[k] = new_pos
        used[k] = True


def test_initial_positions_are_in_range():
    n = LINEAR_MAP_SIZE * FAN_OUT
    pos_map = _make(n)
    for i in range(0, n, 37):
        assert 0 <= pos_map.access_position(i, 0) < n


def test_default_parameters_single_level():
    pos_map = RecursivePositionMap(100)
    assert pos_map.h == 0
    pos_map.access_position(42, 7)
    assert pos_map.access_position(42, 3) == 7


def test_rejects_empty_map():
    with pytest.raises(ValueError):
        _make(0)


def test_rejects_bad_fan_out():
    with pytest.raises(ValueError):
        RecursivePositionMap(10, 8, 6)


def test_rejects_out_of_range_position():
    pos_map = _make(10)
    with pytest.raises(ValueError):
        pos_map.access_position(0, 10)


def test_rejects_out_of_range_key():
    pos_map = _make(10)
    with pytest.raises(IndexError):
        pos_map.access_position(10, 0)