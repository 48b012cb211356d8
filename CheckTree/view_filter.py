# view_filter.py
# Copyright (c) 2025 Alex Prochot
#
# Helpers for pruning a tree down to search matches and their ancestors.
"""Search-driven tree filtering."""


from __future__ import annotations
from dataclasses import replace
from typing import Iterable, Optional, Set

from .config import SHORT_QUERY_MAX_LEN
from .matching import direct_match, normalize_query
from .models import FilterResult, Node


def filter_tree(
    tree: Iterable[Node],
    query: Optional[str],
    short_query_max_len: int = SHORT_QUERY_MAX_LEN,
) -> FilterResult:
    """
    Build a new tree holding only matching nodes and the ancestors of matches.
    Each survivor keeps only its surviving children, so non-matching siblings are dropped
    even under a matching parent. Every survivor that still has children is force-expanded.
    The source tree is never modified.
    """
    roots = tuple(tree)
    q = normalize_query(query)
    if not q:
        return FilterResult(tree=roots)

    matched: Set[str] = set()
    expand: Set[str] = set()
    kept_roots: list[Node] = []

    # (node, list its survivor goes into, its own kept children once they have been pushed)
    stack: list[tuple[Node, list[Node], Optional[list[Node]]]] = [
        (root, kept_roots, None) for root in reversed(roots)
    ]
    while stack:
        node, sink, kept = stack.pop()
        if kept is None:
            kept = []
            stack.append((node, sink, kept))
            stack.extend((child, kept, None) for child in reversed(node.children))
            continue

        is_match = direct_match(node, q, short_query_max_len)
        if is_match:
            matched.add(node.id)
        if not is_match and not kept:
            continue
        if kept:
            expand.add(node.id)
        unchanged = len(kept) == len(node.children) and all(a is b for a, b in zip(kept, node.children))
        sink.append(node if unchanged else replace(node, children=tuple(kept)))

    return FilterResult(
        tree=tuple(kept_roots),
        query=q,
        force_expand_ids=frozenset(expand),
        matched_ids=frozenset(matched),
    )
