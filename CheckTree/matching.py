# matching.py
# Copyright (c) 2025 Alex Prochot
#
# Search predicates used by the tree filter.
"""Direct and transitive search matching for tree nodes."""


from __future__ import annotations
from typing import Optional

from .config import SHORT_QUERY_MAX_LEN
from .models import Node
from .utils import last_segment


def normalize_query(text: Optional[str]) -> str:
    return (text or "").strip().lower()


def direct_match(node: Node, query: str, short_query_max_len: int = SHORT_QUERY_MAX_LEN) -> bool:
    """
    Case-insensitive match of query against the node's label, id, and last id segment.
    Short queries ("t", "26", "dev") match substrings; longer ones must equal a candidate.
    """
    q = normalize_query(query)
    if not q:
        return True
    candidates = (node.label.lower(), node.id.lower(), last_segment(node.id).lower())
    if len(q) > short_query_max_len:
        return q in candidates
    return any(q in cand for cand in candidates)


def subtree_match(node: Node, query: str, short_query_max_len: int = SHORT_QUERY_MAX_LEN) -> bool:
    """True if the node or anything below it directly matches."""
    if direct_match(node, query, short_query_max_len):
        return True
    return any(subtree_match(ch, query, short_query_max_len) for ch in node.children)
