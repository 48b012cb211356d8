from CheckTree.disabled import DisabledResolver
from CheckTree.models import Node
from CheckTree.tree_index import TreeIndex


def _resolver():
    tree = (
        Node("A", "Animals", (
            Node("B", "Bee"),
            Node("C", "Cats", (Node("D", "Dog"), Node("E", "Eel", disabled=True))),
        )),
        Node("M", "Magic", (
            Node("M.n", "Nested", (
                Node("M.n.1", "Item 1", disabled=True),
                Node("M.n.2", "Item 2", disabled=True),
            )),
        )),
        Node("Q", "Locked", (Node("R", "Free"),), disabled=True),
    )
    return DisabledResolver(TreeIndex(tree))


def test_explicit_flag_and_plain_leaves():
    res = _resolver()
    assert res.effective_disabled("E")
    assert not res.effective_disabled("D")
    assert not res.effective_disabled("C")  # D is still selectable


def test_all_disabled_children_disable_the_parent_recursively():
    res = _resolver()
    assert res.effective_disabled("M.n")
    assert res.effective_disabled("M")


def test_explicit_parent_flag_does_not_disable_children():
    res = _resolver()
    assert res.effective_disabled("Q")
    assert not res.effective_disabled("R")


def test_unknown_id_and_node_argument():
    res = _resolver()
    assert res.effective_disabled("missing") is False
    assert res.effective_disabled(res.index.node_by_id("E"))


def test_selectable_sets():
    res = _resolver()
    assert res.selectable_leaf_ids("A") == {"B", "D"}
    assert res.selectable_leaf_ids("D") == {"D"}
    assert res.selectable_leaf_ids("E") == frozenset()
    assert res.selectable_descendant_ids("A") == {"B", "C", "D"}
    assert res.selectable("D") and not res.selectable("E") and not res.selectable("missing")


def test_deep_chain_with_disabled_leaf_disables_every_ancestor():
    node = Node("n1500", "leaf", disabled=True)
    for level in range(1499, -1, -1):
        node = Node(f"n{level}", f"level{level}", (node,))
    res = DisabledResolver(TreeIndex((node,)))
    assert res.effective_disabled("n0")
    assert res.effective_disabled("n750")
    assert not res.selectable("n1499")
