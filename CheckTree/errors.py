# errors.py
# Copyright (c) 2025 Alex Prochot
#
# Exceptions raised by the tree state engine.
"""Exceptions raised by the tree state engine."""


from __future__ import annotations


class TreeError(Exception):
    """Base class for tree engine errors."""


class MalformedTreeError(TreeError, ValueError):
    """Raised when a tree snapshot breaks the unique-id precondition."""
    def __init__(self, duplicate_id: str) -> None:
        super().__init__(f"Duplicate node id in tree: {duplicate_id!r}")
        self.duplicate_id = duplicate_id
