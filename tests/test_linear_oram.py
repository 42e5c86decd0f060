import pytest

from obliv.linear_oram import (
    LinearORAM,
    oblivious_read_index,
    oblivious_read_update_index,
    oblivious_write_index,
)


def test_read():
    oram = LinearORAM(10)
    assert oram.read(3) == 0


def test_write():
    oram = LinearORAM(10)
    oram.write(3, 25)
    assert oram.read(3) == 25


def test_write_touches_only_target():
    oram = LinearORAM(10)
    oram.write(3, 25)
    assert oram.data == [0, 0, 0, 25, 0, 0, 0, 0, 0, 0]


def test_write_outside_is_noop():
    oram = LinearORAM(4)
    oram.write(7, 9)
    assert oram.data == [0, 0, 0, 0]


def test_read_update_returns_previous():
    oram = LinearORAM(5)
    oram.write(2, 11)
    assert oram.read_update(2, 12) == 11
    assert oram.read(2) == 12


def test_custom_default():
    oram = LinearORAM(3, default=(7, 7))
    assert oram.read(1) == (7, 7)
    assert len(oram) == 3


def test_read_out_of_range():
    oram = LinearORAM(3)
    with pytest.raises(IndexError):
        oram.read(3)


def test_oblivious_read_index():
    data = [5, 6, 7]
    assert oblivious_read_index(data, 1, 0) == 6
    with pytest.raises(IndexError):
        oblivious_read_index(data, -1, 0)


def test_oblivious_write_index():
    data = [1, 2, 3]
    oblivious_write_index(data, 2, 9)
    assert data == [1, 2, 9]
    with pytest.raises(IndexError):
        oblivious_write_index(data, 3, 9)


def test_oblivious_read_update_index_with_tuples():
    data = [(1, 2), (3, 4)]
    old = oblivious_read_update_index(data, 0, (5, 6))
    assert old == (1, 2)
    assert data == [(5, 6), (3, 4)]
    with pytest.raises(IndexError):
        oblivious_read_update_index(data, 2, (0, 0))