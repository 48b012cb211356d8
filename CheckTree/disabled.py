# disabled.py
# Copyright (c) 2025 Alex Prochot
#
# Effective disabled state derived from explicit flags.
"""Memoized effective-disabled resolution for one tree snapshot."""


from __future__ import annotations
from typing import Dict, FrozenSet, Union

from .models import Node
from .tree_index import TreeIndex


class DisabledResolver:
    """
    A node is effectively disabled when it is flagged, or when it has children and
    every child is effectively disabled. Results are cached per index snapshot.
    """
    def __init__(self, index: TreeIndex) -> None:
        self.index = index
        self._cache: Dict[str, bool] = {}
        self._selectable_below: Dict[str, FrozenSet[str]] = {}

    def effective_disabled(self, node: Union[str, Node]) -> bool:
        node_id = node.id if isinstance(node, Node) else node
        cached = self._cache.get(node_id)
        if cached is not None:
            return cached
        found = self.index.node_by_id(node_id)
        if found is None:
            return False
        # Post-order over the uncached part of the subtree; a node is resolved once its children are.
        stack: list[tuple[Node, bool]] = [(found, False)]
        while stack:
            current, ready = stack.pop()
            if current.id in self._cache:
                continue
            if current.disabled or not current.children:
                self._cache[current.id] = current.disabled
            elif ready:
                self._cache[current.id] = all(self._cache[child.id] for child in current.children)
            else:
                stack.append((current, True))
                stack.extend((child, False) for child in current.children)
        return self._cache[node_id]

    def selectable(self, node_id: str) -> bool:
        return node_id in self.index and not self.effective_disabled(node_id)

    def selectable_descendant_ids(self, node_id: str) -> FrozenSet[str]:
        cached = self._selectable_below.get(node_id)
        if cached is None:
            cached = frozenset(d for d in self.index.descendant_ids(node_id) if not self.effective_disabled(d))
            self._selectable_below[node_id] = cached
        return cached

    def selectable_leaf_ids(self, node_id: str) -> FrozenSet[str]:
        """Selectable leaves below an internal node, or the node itself when it is a selectable leaf."""
        if self.index.is_leaf(node_id):
            return frozenset((node_id,)) if not self.effective_disabled(node_id) else frozenset()
        return frozenset(leaf for leaf in self.index.leaf_ids(node_id) if not self.effective_disabled(leaf))
