import pytest

from CheckTree.errors import MalformedTreeError, TreeError
from CheckTree.models import Node
from CheckTree.tree_index import TreeIndex, build_index


def _sample_tree():
    return (
        Node("A", "Animals", (
            Node("B", "Bee"),
            Node("C", "Cats", (
                Node("D", "Dog"),
                Node("E", "Eel", disabled=True),
            )),
        )),
        Node("X", "Xylophone"),
    )


def test_lookups_cover_every_node():
    idx = build_index(_sample_tree())
    assert len(idx) == 6
    assert idx.all_ids == ("A", "B", "C", "D", "E", "X")
    assert idx.node_by_id("C").label == "Cats"
    assert idx.parent_of("D") == "C"
    assert idx.parent_of("A") is None
    assert idx.ancestors_of("E") == ["C", "A"]
    assert idx.children_ids("A") == ("B", "C")
    assert idx.depth == 3
    assert idx.depth_of("D") == 2


def test_descendant_and_leaf_sets():
    idx = TreeIndex(_sample_tree())
    assert idx.descendant_ids("A") == {"B", "C", "D", "E"}
    assert idx.leaf_ids("A") == {"B", "D", "E"}
    assert idx.leaf_ids("C") == {"D", "E"}
    # A leaf has nothing below it
    assert idx.descendant_ids("D") == frozenset()
    assert idx.leaf_ids("D") == frozenset()
    assert idx.internal_ids() == ["A", "C"]
    assert idx.is_leaf("X") and not idx.is_leaf("A")


def test_unknown_ids_are_absent_not_errors():
    idx = TreeIndex(_sample_tree())
    assert "nope" not in idx
    assert idx.node_by_id("nope") is None
    assert idx.parent_of("nope") is None
    assert idx.descendant_ids("nope") == frozenset()
    assert idx.leaf_ids("nope") == frozenset()
    assert idx.ancestors_of("nope") == []
    assert idx.is_leaf("nope") is False


def test_duplicate_ids_fail_fast():
    tree = (Node("A", "a", (Node("dup", "x"),)), Node("B", "b", (Node("dup", "y"),)))
    with pytest.raises(MalformedTreeError) as exc:
        TreeIndex(tree)
    assert exc.value.duplicate_id == "dup"
    assert isinstance(exc.value, TreeError)
    assert isinstance(exc.value, ValueError)


def test_empty_tree_is_valid():
    idx = TreeIndex(())
    assert len(idx) == 0
    assert idx.depth == 0
    assert idx.internal_ids() == []


def _chain(depth):
    node = Node(f"n{depth}", f"leaf{depth}")
    for level in range(depth - 1, -1, -1):
        node = Node(f"n{level}", f"level{level}", (node,))
    return (node,)


def test_deep_chain_indexes_without_hitting_recursion_limit():
    idx = TreeIndex(_chain(1500))
    assert len(idx) == 1501
    assert idx.depth == 1501
    assert idx.all_ids[:3] == ("n0", "n1", "n2")
    assert idx.leaf_ids("n0") == {"n1500"}
    assert len(idx.descendant_ids("n0")) == 1500
    assert idx.parent_of("n1500") == "n1499"
    assert idx.depth_of("n1500") == 1500
