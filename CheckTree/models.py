# models.py
# Copyright (c) 2025 Alex Prochot
#
# Data models for checkable trees, selection granularity, and filter results.
"""Domain models for tree nodes, selection states, and filtered views."""


from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Iterable, Mapping, Optional, Tuple


class Granularity(Enum):
    """Which ids the selection set may hold."""
    LEAF_ONLY = "leaf-only"
    ANY_NODE = "any-node"


class SelectionState(Enum):
    UNSELECTED = auto()
    PARTIAL = auto()
    FULLY_SELECTED = auto()


@dataclass(frozen=True)
class Node:
    """One entry in a tree snapshot; `disabled` is the explicit flag only."""
    id: str
    label: str = ""
    children: Tuple["Node", ...] = ()
    disabled: bool = False

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        parent_id: Optional[str] = None,
        qualify_ids: bool = False,
    ) -> "Node":
        """
        Build a node from a nested mapping with `id`, `name`/`label`, `children`, `disabled`.
        With qualify_ids, child ids are prefixed with the parent id: "plants" + "roses" -> "plants.roses".
        """
        raw_id = str(data["id"])
        node_id = f"{parent_id}.{raw_id}" if (qualify_ids and parent_id) else raw_id
        label = data.get("label", data.get("name", raw_id))
        children = tuple(
            cls.from_dict(child, parent_id=node_id, qualify_ids=qualify_ids)
            for child in data.get("children") or ()
        )
        return cls(node_id, str(label), children, bool(data.get("disabled", False)))

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"id": self.id, "label": self.label, "disabled": self.disabled}
        if self.children:
            out["children"] = [child.to_dict() for child in self.children]
        return out

    def __repr__(self) -> str:
        return f"Node(id={self.id!r}, children={len(self.children)}, disabled={self.disabled})"


Tree = Tuple[Node, ...]


def tree_from_dicts(items: Iterable[Mapping[str, Any]], qualify_ids: bool = False) -> Tree:
    return tuple(Node.from_dict(item, qualify_ids=qualify_ids) for item in items)


def tree_to_dicts(tree: Iterable[Node]) -> list[dict[str, Any]]:
    return [node.to_dict() for node in tree]


@dataclass(frozen=True)
class FilterResult:
    """Pruned view of a tree for one query, plus the ids that must be expanded to show matches."""
    tree: Tree
    query: str = ""
    force_expand_ids: frozenset[str] = field(default_factory=frozenset)
    matched_ids: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_active(self) -> bool:
        return bool(self.query)

    @property
    def is_empty(self) -> bool:
        """True only when a query is active and nothing survived it."""
        return self.is_active and not self.tree
