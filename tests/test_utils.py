# tests/test_utils.py
from bptree_index.db.bptree import BPTree
from bptree_index.utils import (
    check_invariants,
    is_height_balanced,
    leaf_chain_ordered,
    leaf_depths,
    separators_consistent,
    tree_stats,
)


def test_depths_and_stats():
    t = BPTree(3)
    for k in range(1, 8):
        t.insert(k, k)
    assert leaf_depths(t) == [3, 3, 3, 3]
    assert is_height_balanced(t)

    stats = tree_stats(t)
    assert stats["size"] == 7
    assert stats["height"] == 3
    assert stats["leaves"] == 4
    assert stats["internal_nodes"] == 3
    assert stats["avg_leaf_fill"] == 7 / 4


def test_detects_broken_chain_order():
    t = BPTree(4)
    for k in [1, 2, 3, 4, 5]:
        t.insert(k, k)
    assert leaf_chain_ordered(t)
    first = t.root.first_child()
    first.keys[0] = 100
    assert not leaf_chain_ordered(t)
    assert "leaf chain out of order" in check_invariants(t)


def test_detects_broken_previous_link():
    t = BPTree(3)
    for k in [1, 2, 3, 4]:
        t.insert(k, k)
    first = t.root.first_child()
    first.next.previous = None
    assert not leaf_chain_ordered(t)


def test_detects_separator_mismatch():
    t = BPTree(4)
    for k in [1, 2, 3, 4]:
        t.insert(k, k)
    assert separators_consistent(t)
    t.root.keys[0] = 99
    assert not separators_consistent(t)


def test_empty_tree_is_consistent():
    t = BPTree(5)
    assert check_invariants(t) == []
    assert tree_stats(t)["avg_leaf_fill"] == 0.0
