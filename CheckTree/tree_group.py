# tree_group.py
# Copyright (c) 2025 Alex Prochot
#
# Several independently selectable trees driven by one shared search box.
"""Named tree states that share a single query."""

from __future__ import annotations
from collections import OrderedDict
import logging
from typing import Dict, Iterable, Iterator, Optional

from .config import TreeConfig
from .models import Node
from .tree_state import TreeState

logger = logging.getLogger(__name__)


class TreeGroup:
    """
    Each tree keeps its own selection and expansion; the query is owned here and
    pushed to every member. `no_results` is raised only when a query is active and
    every tree is empty under it.
    """
    def __init__(self, config: Optional[TreeConfig] = None) -> None:
        self.config = config
        self._trees: Dict[str, TreeState] = OrderedDict()
        self._query = ""

    def add(
        self,
        name: str,
        tree: Iterable[Node],
        selected: Iterable[str] = (),
        expanded: Iterable[str] = (),
        config: Optional[TreeConfig] = None,
    ) -> TreeState:
        if name in self._trees:
            raise KeyError(f"Tree {name!r} already registered")
        state = TreeState(tree, config or self.config, selected, expanded)
        if self._query:
            state.set_query(self._query)
        self._trees[name] = state
        return state

    def __getitem__(self, name: str) -> TreeState:
        return self._trees[name]

    def __contains__(self, name: object) -> bool:
        return name in self._trees

    def __iter__(self) -> Iterator[str]:
        return iter(self._trees)

    def __len__(self) -> int:
        return len(self._trees)

    @property
    def query(self) -> str:
        return self._query

    def set_query(self, text: Optional[str]) -> bool:
        """Apply one query to every tree; returns the shared no-results flag."""
        self._query = text or ""
        for state in self._trees.values():
            state.set_query(self._query)
        if self.no_results:
            logger.info("No items found matching %r", self._query)
        return self.no_results

    @property
    def no_results(self) -> bool:
        if not self._trees:
            return False
        return all(state.no_matches for state in self._trees.values())

    @property
    def total_selected(self) -> int:
        return sum(len(state.selection.selected) for state in self._trees.values())

    def selected_by_tree(self) -> Dict[str, list[str]]:
        return {name: state.selected_ids() for name, state in self._trees.items()}
