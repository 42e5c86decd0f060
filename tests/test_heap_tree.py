import pytest

from obliv.heap_tree import HeapTree


@pytest.mark.parametrize("height", [0, 1, 2, 3, 5])
def test_size(height):
    tree = HeapTree(height, int)
    assert len(tree) == 2**height - 1
    assert tree.height == height


def test_layout_matches_documented_order():
    tree = HeapTree(3, int)
    assert tree.get_index(0, 0) == 0
    assert tree.get_index(1, 0) == 1
    assert tree.get_index(1, 1) == 2
    assert tree.get_index(2, 0) == 3
    assert tree.get_index(2, 2) == 5
    assert tree.get_index(2, 1) == 4
    assert tree.get_index(2, 3) == 6


def test_indices_stay_within_their_level():
    tree = HeapTree(3, int)
    for depth in range(3):
        for path in range(4):
            index = tree.get_index(depth, path)
            level_offset = (1 << depth) - 1
            assert level_offset <= index < 2 * level_offset + 1


def test_root_shared_by_all_paths():
    tree = HeapTree(4, int)
    assert {tree.get_index(0, path) for path in range(8)} == {0}


def test_depth_out_of_range():
    tree = HeapTree(3, int)
    with pytest.raises(IndexError):
        tree.get_index(3, 0)
    with pytest.raises(IndexError):
        tree.get_path_at_depth(-1, 0)


def test_set_and_get_roundtrip():
    tree = HeapTree(3, int)
    tree.set_path_at_depth(2, 1, 42)
    assert tree.get_path_at_depth(2, 1) == 42
    assert tree.tree[4] == 42
    assert tree.get_path_at_depth(2, 0) == 0


def test_factory_builds_distinct_nodes():
    tree = HeapTree(2, list)
    tree.get_path_at_depth(1, 0).append(1)
    assert tree.get_path_at_depth(1, 1) == []
    assert tree.get_path_at_depth(0, 0) == []


def test_sibling():
    tree = HeapTree(3, int)
    for index in range(len(tree)):
        tree.tree[index] = index
    assert tree.get_sibling(2, 0) == 5
    assert tree.get_sibling(2, 2) == 3
    assert tree.get_sibling(1, 0) == 2


def test_root_has_no_sibling():
    tree = HeapTree(2, int)
    with pytest.raises(ValueError):
        tree.get_sibling(0, 0)


def test_negative_height_rejected():
    with pytest.raises(ValueError):
        HeapTree(-1, int)