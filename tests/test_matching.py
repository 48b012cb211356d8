from CheckTree.matching import direct_match, normalize_query, subtree_match
from CheckTree.models import Node


def test_normalize_query():
    assert normalize_query("  DoG ") == "dog"
    assert normalize_query(None) == ""


def test_short_queries_match_substrings_case_insensitively():
    node = Node("Websso.Oid.dev.T266622", "T266622")
    assert direct_match(node, "t")
    assert direct_match(node, "26")
    assert direct_match(node, "DEV")  # id substring
    assert not direct_match(node, "prod")


def test_long_queries_require_exact_match():
    node = Node("plants.sunflowers", "Sunflowers")
    assert direct_match(node, "sunflowers")          # label / last segment
    assert direct_match(node, "plants.sunflowers")   # full id
    assert not direct_match(node, "sunflower")       # 9 chars, not equal to any candidate
    assert direct_match(node, "sunfl")               # 5 chars, still substring


def test_threshold_is_configurable():
    node = Node("animals", "Animals")
    assert not direct_match(node, "animal")
    assert direct_match(node, "animal", short_query_max_len=10)


def test_empty_query_matches_everything():
    assert direct_match(Node("x", "Anything"), "")
    assert direct_match(Node("x", "Anything"), "   ")


def test_subtree_match_looks_through_descendants():
    tree = Node("A", "Animals", (Node("C", "Cats", (Node("D", "Dog"),)),))
    assert subtree_match(tree, "dog")
    assert not direct_match(tree, "dog")
    assert not subtree_match(tree, "zebra")
