# expansion.py
# Copyright (c) 2025 Alex Prochot
#
# Expanded/collapsed bookkeeping for tree nodes.
"""Set of expanded node ids."""


from __future__ import annotations
from typing import FrozenSet, Iterable, Set

from .tree_index import TreeIndex


class ExpansionStore:
    def __init__(self, expanded: Iterable[str] = ()) -> None:
        self._expanded: Set[str] = set(expanded)

    @property
    def expanded(self) -> FrozenSet[str]:
        return frozenset(self._expanded)

    def expanded_ids(self) -> list[str]:
        return sorted(self._expanded)

    def is_expanded(self, node_id: str) -> bool:
        return node_id in self._expanded

    def toggle(self, node_id: str) -> FrozenSet[str]:
        if node_id in self._expanded:
            self._expanded.discard(node_id)
        else:
            self._expanded.add(node_id)
        return self.expanded

    def expand(self, node_id: str) -> FrozenSet[str]:
        self._expanded.add(node_id)
        return self.expanded

    def collapse(self, node_id: str) -> FrozenSet[str]:
        self._expanded.discard(node_id)
        return self.expanded

    def expand_all(self, index: TreeIndex) -> FrozenSet[str]:
        self._expanded = set(index.internal_ids())
        return self.expanded

    def collapse_all(self) -> FrozenSet[str]:
        self._expanded.clear()
        return self.expanded

    def set_expanded(self, ids: Iterable[str]) -> FrozenSet[str]:
        self._expanded = set(ids)
        return self.expanded

    def merge_forced(self, ids: Iterable[str]) -> FrozenSet[str]:
        """Union search-forced ids in; never drops an existing expansion."""
        self._expanded.update(ids)
        return self.expanded
