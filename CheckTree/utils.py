# utils.py
# Copyright (c) 2025 Alex Prochot
#
# Id and traversal helpers used across the tree engine.
"""Id and traversal helpers plus log path lookup."""


from __future__ import annotations
import os
from typing import Iterable, Iterator

from .models import Node


def last_segment(node_id: str) -> str:
    """'plants.flowers.roses' -> 'roses'"""
    return node_id.rsplit(".", 1)[-1]


def iter_nodes(tree: Iterable[Node]) -> Iterator[Node]:
    """Pre-order walk over every node of a tree."""
    stack = list(reversed(tuple(tree)))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def get_log_path() -> str:
    """Log file used by the CLI; CHECKTREE_LOG overrides the default."""
    return os.environ.get("CHECKTREE_LOG") or os.path.abspath("checktree.log")
