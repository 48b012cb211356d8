# selection.py
# Copyright (c) 2025 Alex Prochot
#
# Checkbox selection state, propagation, and search-mode bookkeeping.
"""Selection engine: canonical checked-id set over one tree snapshot."""


from __future__ import annotations
import logging
from typing import AbstractSet, FrozenSet, Iterable, Optional, Set

from .disabled import DisabledResolver
from .models import Granularity, SelectionState
from .tree_index import TreeIndex

logger = logging.getLogger(__name__)


class SelectionEngine:
    """
    Owns the set of checked ids for one tree.

    Leaf-only granularity stores leaf ids only; toggling an internal node applies to the
    selectable leaves below it. Any-node granularity stores internal ids as well: a toggle
    cascades down to every selectable descendant, then each ancestor is recomputed bottom-up
    (in the set iff all its selectable descendants are). Effectively disabled ids are never
    added or removed by a toggle.

    Ids that are not in the current tree (foreign ids) are kept as-is.
    """
    def __init__(
        self,
        index: TreeIndex,
        granularity: Granularity = Granularity.LEAF_ONLY,
        selected: Iterable[str] = (),
        resolver: Optional[DisabledResolver] = None,
    ) -> None:
        self.index = index
        self.granularity = granularity
        self.resolver = resolver or DisabledResolver(index)
        self._selected: Set[str] = set()
        # Internal ids the user checked while a query was active
        self.search_origin_parents: Set[str] = set()
        self._search_active = False
        self.set_selection(selected)

    # ---------------- Snapshot / lookup ----------------
    @property
    def selected(self) -> FrozenSet[str]:
        return frozenset(self._selected)

    @property
    def search_active(self) -> bool:
        return self._search_active

    def is_selected(self, node_id: str) -> bool:
        return node_id in self._selected

    def selected_ids(self) -> list[str]:
        """Selected ids in tree order, followed by foreign ids sorted."""
        known = [nid for nid in self.index.all_ids if nid in self._selected]
        foreign = sorted(nid for nid in self._selected if nid not in self.index)
        return known + foreign

    def selection_state(self, node_id: str) -> SelectionState:
        node = self.index.node_by_id(node_id)
        if node is None or node.is_leaf:
            return SelectionState.FULLY_SELECTED if node_id in self._selected else SelectionState.UNSELECTED

        leaves = self.resolver.selectable_leaf_ids(node_id)
        if leaves:
            hits = len(leaves & self._selected)
            if hits == len(leaves):
                return SelectionState.FULLY_SELECTED
            if hits:
                return SelectionState.PARTIAL
        elif node_id in self._selected:
            # Nothing selectable below, so a stale own id can never mean "fully selected"
            return SelectionState.PARTIAL

        if not self._selected.isdisjoint(self.index.descendant_ids(node_id)):
            return SelectionState.PARTIAL
        return SelectionState.UNSELECTED

    # ---------------- Mutation ----------------
    def set_selection(self, ids: Iterable[str]) -> FrozenSet[str]:
        """
        Replace the selection. Internal ids are expanded to their selectable descendants
        (leaves only under leaf-only granularity), then ancestor membership is made consistent.
        """
        self._selected = set()
        for nid in ids:
            node = self.index.node_by_id(nid)
            if node is None or node.is_leaf:
                self._selected.add(nid)
                continue
            if self.granularity is Granularity.LEAF_ONLY:
                self._selected |= self.resolver.selectable_leaf_ids(nid)
                continue
            self._selected.add(nid)
            self._selected |= self.resolver.selectable_descendant_ids(nid)
        if self.granularity is Granularity.ANY_NODE:
            self._sweep(self.index.internal_ids())
        return self.selected

    def rebind(self, index: TreeIndex, resolver: Optional[DisabledResolver] = None) -> FrozenSet[str]:
        """
        Move to a new tree snapshot, keeping the checked ids. Under any-node granularity parents
        are recomputed, so a checked parent that gained an unchecked child drops out.
        """
        previous = list(self._selected)
        self.index = index
        self.resolver = resolver or DisabledResolver(index)
        if self.granularity is Granularity.LEAF_ONLY:
            return self.set_selection(previous)
        self._selected = set(previous)
        self._sweep(self.index.internal_ids())
        return self.selected

    def toggle(
        self,
        node_id: str,
        checked: bool,
        visible_ids: Optional[AbstractSet[str]] = None,
    ) -> FrozenSet[str]:
        """
        Apply a user checkbox change. Unknown and effectively disabled ids are ignored.
        visible_ids limits the cascade to descendants present in the current filtered view.
        """
        if node_id not in self.index:
            logger.debug("Ignoring toggle of unknown id %r", node_id)
            return self.selected
        if self.resolver.effective_disabled(node_id):
            logger.debug("Ignoring toggle of disabled id %r", node_id)
            return self.selected

        self._apply(node_id, checked, visible_ids)

        if self._search_active:
            if checked and not self.index.is_leaf(node_id):
                self.search_origin_parents.add(node_id)
            elif not checked:
                related = {node_id, *self.index.ancestors_of(node_id)} | self.index.descendant_ids(node_id)
                self.search_origin_parents -= related
        return self.selected

    def _apply(self, node_id: str, checked: bool, visible_ids: Optional[AbstractSet[str]]) -> None:
        below = self.index.descendant_ids(node_id)
        narrow = visible_ids is not None and not below.isdisjoint(visible_ids)

        if self.granularity is Granularity.LEAF_ONLY:
            targets = self.resolver.selectable_leaf_ids(node_id)
            if narrow:
                targets = targets & visible_ids
            self._set_many(targets, checked)
            return

        targets = {node_id} | self.resolver.selectable_descendant_ids(node_id)
        if narrow:
            targets = {node_id} | (targets & visible_ids)
        # Downward cascade first, then recompute the subtree and the ancestor chain.
        self._set_many(targets, checked)
        subtree = [nid for nid in self.index.all_ids if nid in below and not self.index.is_leaf(nid)]
        self._sweep([node_id] + subtree)
        self._sweep_ancestors(node_id)

    def _set_many(self, ids: Iterable[str], checked: bool) -> None:
        if checked:
            self._selected.update(ids)
        else:
            self._selected.difference_update(ids)

    def _refresh(self, node_id: str) -> None:
        if self.index.is_leaf(node_id) or self.resolver.effective_disabled(node_id):
            return
        if self.resolver.selectable_descendant_ids(node_id) <= self._selected:
            self._selected.add(node_id)
        else:
            self._selected.discard(node_id)

    def _sweep(self, internal_ids: list[str]) -> None:
        """Recompute internal ids given in pre-order; walking them reversed visits children first."""
        for nid in reversed(internal_ids):
            self._refresh(nid)

    def _sweep_ancestors(self, node_id: str) -> None:
        for parent in self.index.ancestors_of(node_id):
            self._refresh(parent)

    # ---------------- Search bookkeeping ----------------
    def begin_search(self) -> None:
        self._search_active = True

    def end_search(self, restore_parents: bool = True) -> FrozenSet[str]:
        """
        Leave search mode. Parents checked during the search that are no longer fully
        selected are re-checked across the whole tree.
        """
        if not self._search_active:
            return self.selected
        self._search_active = False
        if not restore_parents:
            self.search_origin_parents.clear()
            return self.selected

        pending: Set[str] = set()
        ordered = [nid for nid in self.index.all_ids if nid in self.search_origin_parents]
        for nid in self.search_origin_parents:
            if nid not in self.index:
                logger.debug("Search parent %r not in current tree; keeping it for later", nid)
                pending.add(nid)
        for nid in ordered:
            if self.resolver.effective_disabled(nid):
                continue
            if self.selection_state(nid) is not SelectionState.FULLY_SELECTED:
                self._apply(nid, True, None)
                logger.debug("Restored parent selection %r after search", nid)
        self.search_origin_parents = pending
        return self.selected
