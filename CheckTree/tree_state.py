# tree_state.py
# Copyright (c) 2025 Alex Prochot
#
# Tree snapshot, checkbox state, expansion, and search filter for one logical tree.
"""Single owner of selection, expansion, and search state for one tree."""

from __future__ import annotations
from dataclasses import replace
import logging
from typing import Any, FrozenSet, Iterable, Optional

from .config import SearchScope, TreeConfig
from .disabled import DisabledResolver
from .expansion import ExpansionStore
from .matching import normalize_query
from .models import FilterResult, Granularity, Node, SelectionState, Tree
from .selection import SelectionEngine
from .tree_index import TreeIndex
from .utils import iter_nodes
from .view_filter import filter_tree

logger = logging.getLogger(__name__)


class TreeState:
    """
    Wrapper for the tree snapshot and its derived state so callers don't juggle
    index, selection, expansion and filter objects separately.

    Intents: toggle_select, toggle_expand, set_query, expand_all, collapse_all, set_tree.
    Outputs: selected_ids, expanded_ids, visible_tree, no_matches, selection_state.
    """
    def __init__(
        self,
        tree: Iterable[Node],
        config: Optional[TreeConfig] = None,
        selected: Iterable[str] = (),
        expanded: Iterable[str] = (),
    ) -> None:
        self.config = config or TreeConfig()
        self.tree: Tree = tuple(tree)
        self.index = TreeIndex(self.tree)
        self.resolver = DisabledResolver(self.index)
        self.selection = SelectionEngine(self.index, self.config.granularity, selected, self.resolver)
        self.expansion = ExpansionStore(expanded)
        self._query = ""
        self._filter = FilterResult(tree=self.tree)
        self._visible_ids: FrozenSet[str] = frozenset(self.index.all_ids)

    # ---------------- Outputs ----------------
    @property
    def query(self) -> str:
        return self._query

    @property
    def filter_result(self) -> FilterResult:
        return self._filter

    @property
    def visible_tree(self) -> Tree:
        return self._filter.tree

    @property
    def no_matches(self) -> bool:
        return self._filter.is_empty

    @property
    def granularity(self) -> Granularity:
        return self.config.granularity

    def selected_ids(self) -> list[str]:
        return self.selection.selected_ids()

    def expanded_ids(self) -> list[str]:
        return self.expansion.expanded_ids()

    def node(self, node_id: str) -> Optional[Node]:
        return self.index.node_by_id(node_id)

    def selection_state(self, node_id: str) -> SelectionState:
        return self.selection.selection_state(node_id)

    def effective_disabled(self, node_id: str) -> bool:
        return self.resolver.effective_disabled(node_id)

    def is_visible(self, node_id: str) -> bool:
        return node_id in self._visible_ids

    # ---------------- Intents ----------------
    def toggle_select(self, node_id: str, checked: bool) -> FrozenSet[str]:
        visible = None
        if self._filter.is_active and self.config.search_scope is SearchScope.VISIBLE:
            visible = self._visible_ids
        return self.selection.toggle(node_id, checked, visible_ids=visible)

    def toggle_expand(self, node_id: str) -> FrozenSet[str]:
        node = self.index.node_by_id(node_id)
        if node is None or node.is_leaf:
            logger.debug("Ignoring expand toggle for %r (unknown or leaf)", node_id)
            return self.expansion.expanded
        return self.expansion.toggle(node_id)

    def expand_all(self) -> FrozenSet[str]:
        return self.expansion.expand_all(self.index)

    def collapse_all(self) -> FrozenSet[str]:
        return self.expansion.collapse_all()

    def set_query(self, text: Optional[str]) -> FilterResult:
        """
        Re-filter for a new query. Entering a search starts search-mode bookkeeping;
        clearing it reconciles parents checked while filtered.
        """
        was_active = self._filter.is_active
        self._query = text or ""
        self._run_filter()
        if self._filter.is_active:
            if not was_active:
                self.selection.begin_search()
        elif was_active:
            self.selection.end_search(restore_parents=self.config.restore_search_parents)
        return self._filter

    def set_tree(self, tree: Iterable[Node]) -> None:
        """Adopt a new snapshot; checked and expanded ids carry over by id."""
        self.tree = tuple(tree)
        self.index = TreeIndex(self.tree)
        self.resolver = DisabledResolver(self.index)
        self.selection.rebind(self.index, self.resolver)
        self._run_filter()

    def _run_filter(self) -> None:
        if not normalize_query(self._query):
            self._filter = FilterResult(tree=self.tree)
            self._visible_ids = frozenset(self.index.all_ids)
            return
        self._filter = filter_tree(self.tree, self._query, self.config.short_query_max_len)
        self._visible_ids = frozenset(node.id for node in iter_nodes(self._filter.tree))
        self.expansion.merge_forced(self._filter.force_expand_ids)
        logger.debug(
            "Query %r kept %d node(s), forced %d expansion(s)",
            self._filter.query, len(self._visible_ids), len(self._filter.force_expand_ids),
        )

    # ---------------- Serialization ----------------
    def serialize(self) -> dict[str, Any]:
        """Plain-data snapshot of the mutable state; writing it anywhere is the caller's job."""
        return {
            "granularity": self.config.granularity.value,
            "selected": self.selected_ids(),
            "expanded": self.expanded_ids(),
            "query": self._query,
        }

    def restore(self, saved: dict[str, Any]) -> None:
        """Restore state from a serialize() payload; the tree itself is not part of it."""
        if "granularity" in saved:
            granularity = Granularity(saved["granularity"])
            if granularity is not self.config.granularity:
                self.config = replace(self.config, granularity=granularity)
                self.selection.granularity = granularity
        self.selection.search_origin_parents.clear()
        self.selection.set_selection(saved.get("selected", []))
        self.expansion.set_expanded(saved.get("expanded", []))
        self.set_query(saved.get("query", ""))

    def __repr__(self) -> str:
        return (
            f"TreeState(nodes={len(self.index)}, selected={len(self.selection.selected)}, "
            f"expanded={len(self.expansion.expanded)}, query={self._query!r})"
        )
