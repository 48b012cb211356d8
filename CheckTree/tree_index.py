# tree_index.py
# Copyright (c) 2025 Alex Prochot
#
# Flat id-based lookups built once per tree snapshot.
"""Id-keyed index over an immutable tree snapshot."""


from __future__ import annotations
from typing import Dict, FrozenSet, Iterable, Optional, Tuple

from .errors import MalformedTreeError
from .models import Node, Tree

_EMPTY: FrozenSet[str] = frozenset()


class TreeIndex:
    """
    Lookup tables (node, parent, descendants, leaves) for one tree snapshot.
    Built in a single walk and never mutated; build a new index when the tree changes.
    Unknown ids return None / empty sets rather than raising, since ids from an older
    or unfiltered snapshot are routinely looked up.
    """
    def __init__(self, tree: Iterable[Node]) -> None:
        self.roots: Tree = tuple(tree)
        self._nodes: Dict[str, Node] = {}
        self._parent: Dict[str, Optional[str]] = {}
        self._depth: Dict[str, int] = {}
        self._descendants: Dict[str, FrozenSet[str]] = {}
        self._leaves: Dict[str, FrozenSet[str]] = {}
        self.all_ids: Tuple[str, ...] = ()
        self.depth = 0

        order: list[str] = []
        # (node, parent id, level, children done); children are pushed reversed to keep pre-order.
        stack: list[tuple[Node, Optional[str], int, bool]] = [(root, None, 0, False) for root in reversed(self.roots)]
        while stack:
            node, parent_id, level, done = stack.pop()
            if done:
                below: set[str] = set()
                leaves: set[str] = set()
                for child in node.children:
                    below.add(child.id)
                    below |= self._descendants[child.id]
                    if child.is_leaf:
                        leaves.add(child.id)
                    leaves |= self._leaves[child.id]
                self._descendants[node.id] = frozenset(below) if below else _EMPTY
                self._leaves[node.id] = frozenset(leaves) if leaves else _EMPTY
                continue

            if node.id in self._nodes:
                raise MalformedTreeError(node.id)
            self._nodes[node.id] = node
            self._parent[node.id] = parent_id
            self._depth[node.id] = level
            order.append(node.id)
            self.depth = max(self.depth, level + 1)
            stack.append((node, parent_id, level, True))
            stack.extend((child, node.id, level + 1, False) for child in reversed(node.children))

        self.all_ids = tuple(order)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def node_by_id(self, node_id: str) -> Optional[Node]:
        return self._nodes.get(node_id)

    def parent_of(self, node_id: str) -> Optional[str]:
        return self._parent.get(node_id)

    def depth_of(self, node_id: str) -> Optional[int]:
        return self._depth.get(node_id)

    def descendant_ids(self, node_id: str) -> FrozenSet[str]:
        """All ids below node_id at any depth."""
        return self._descendants.get(node_id, _EMPTY)

    def leaf_ids(self, node_id: str) -> FrozenSet[str]:
        """Ids of childless nodes strictly below node_id."""
        return self._leaves.get(node_id, _EMPTY)

    def children_ids(self, node_id: str) -> Tuple[str, ...]:
        node = self._nodes.get(node_id)
        return tuple(child.id for child in node.children) if node else ()

    def ancestors_of(self, node_id: str) -> list[str]:
        """Ancestor ids, nearest parent first."""
        out: list[str] = []
        parent = self._parent.get(node_id)
        while parent is not None:
            out.append(parent)
            parent = self._parent.get(parent)
        return out

    def is_leaf(self, node_id: str) -> bool:
        node = self._nodes.get(node_id)
        return bool(node) and node.is_leaf

    def internal_ids(self) -> list[str]:
        return [nid for nid in self.all_ids if self._nodes[nid].children]

    def __repr__(self) -> str:
        return f"TreeIndex(nodes={len(self._nodes)}, roots={len(self.roots)}, depth={self.depth})"


def build_index(tree: Iterable[Node]) -> TreeIndex:
    return TreeIndex(tree)
