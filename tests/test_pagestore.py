import pytest

from obliv.pagestore import MemStore


def test_open_reads_zero_page():
    store = MemStore.open("", 2)
    assert store.pages_len() == 2
    page = store.read_page(0)
    assert page == bytes(4096)
    assert len(page) == MemStore.PAGE_SIZE


def test_write_read_round_trip():
    store = MemStore.open("pages", 3)
    data = bytes(i % 256 for i in range(MemStore.PAGE_SIZE))
    store.write_page(1, data)
    assert store.read_page(1) == data
    assert store.read_page(0) == bytes(MemStore.PAGE_SIZE)
    assert store.read_page(2) == bytes(MemStore.PAGE_SIZE)


def test_overwrite_page():
    store = MemStore.open("pages", 1)
    store.write_page(0, b"\x01" * MemStore.PAGE_SIZE)
    store.write_page(0, b"\x02" * MemStore.PAGE_SIZE)
    assert store.read_page(0) == b"\x02" * MemStore.PAGE_SIZE


def test_read_returns_copy():
    store = MemStore.open("pages", 1)
    page = bytearray(store.read_page(0))
    page[0] = 9
    assert store.read_page(0)[0] == 0


def test_wrong_size_write_rejected():
    store = MemStore.open("pages", 1)
    with pytest.raises(ValueError):
        store.write_page(0, b"short")


def test_out_of_range_page_rejected():
    store = MemStore.open("pages", 2)
    with pytest.raises(IndexError):
        store.read_page(2)
    with pytest.raises(IndexError):
        store.write_page(-1, bytes(MemStore.PAGE_SIZE))


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        MemStore.open("pages", -1)