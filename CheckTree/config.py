# config.py
# Copyright (c) 2025 Alex Prochot
#
# Tunables for selection granularity and search behaviour.
"""Configuration for a tree state owner."""


from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from .models import Granularity

# Queries up to this many characters use substring matching; longer ones must match exactly.
SHORT_QUERY_MAX_LEN = 5


class SearchScope(Enum):
    """How far a checkbox toggle reaches while a query is active."""
    FULL = "full"
    VISIBLE = "visible"


@dataclass
class TreeConfig:
    granularity: Granularity = Granularity.LEAF_ONLY
    short_query_max_len: int = SHORT_QUERY_MAX_LEN
    search_scope: SearchScope = SearchScope.FULL
    restore_search_parents: bool = True

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TreeConfig":
        """Parse plain values ("any-node", "visible", ...); unknown enum values raise ValueError."""
        cfg = cls()
        if "granularity" in data:
            cfg.granularity = Granularity(data["granularity"])
        if "short_query_max_len" in data:
            value = int(data["short_query_max_len"])
            if value < 0:
                raise ValueError(f"short_query_max_len must be >= 0, got {value}")
            cfg.short_query_max_len = value
        if "search_scope" in data:
            cfg.search_scope = SearchScope(data["search_scope"])
        if "restore_search_parents" in data:
            cfg.restore_search_parents = bool(data["restore_search_parents"])
        return cfg

    def to_dict(self) -> dict[str, Any]:
        return {
            "granularity": self.granularity.value,
            "short_query_max_len": self.short_query_max_len,
            "search_scope": self.search_scope.value,
            "restore_search_parents": self.restore_search_parents,
        }
