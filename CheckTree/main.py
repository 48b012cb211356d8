# main.py
# Copyright (c) 2025 Alex Prochot
#
# Command-line entry point for inspecting tree state.
"""Command-line entry point: load a JSON tree, apply intents, print the resulting state."""


import argparse
import json
import logging
import sys
from typing import Optional, Sequence

from .config import TreeConfig
from .errors import TreeError
from .models import Granularity, tree_from_dicts, tree_to_dicts
from .tree_state import TreeState
from .utils import get_log_path

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="checktree", description="Apply selection/search intents to a JSON tree.")
    parser.add_argument("tree", help="JSON file holding a list of nodes (id, name/label, children, disabled).")
    parser.add_argument("--query", default="", help="Search text to filter the tree with.")
    parser.add_argument("--select", action="append", default=[], metavar="ID", help="Check a node (repeatable).")
    parser.add_argument("--deselect", action="append", default=[], metavar="ID", help="Uncheck a node (repeatable).")
    parser.add_argument(
        "--granularity",
        choices=[g.value for g in Granularity],
        default=Granularity.LEAF_ONLY.value,
        help="Store leaf ids only, or any node id.",
    )
    parser.add_argument("--qualify-ids", action="store_true", help="Prefix child ids with their parent id.")
    parser.add_argument("--expand-all", action="store_true", help="Expand every internal node.")
    return parser


def load_tree(path: str, qualify_ids: bool = False):
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    items = data.get("items", []) if isinstance(data, dict) else data
    if not isinstance(items, list) or not all(isinstance(item, dict) for item in items):
        raise ValueError("expected a list of tree items")
    return tree_from_dicts(items, qualify_ids=qualify_ids)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main function: parse arguments, run the intents, and print a JSON summary.
    """
    if not logging.getLogger().handlers:
        logging.basicConfig(
            filename=get_log_path(),
            level=logging.INFO,
            format="%(asctime)s - %(message)s",
            filemode="w",
        )
    args = build_parser().parse_args(argv)

    try:
        tree = load_tree(args.tree, qualify_ids=args.qualify_ids)
        state = TreeState(tree, TreeConfig(granularity=Granularity(args.granularity)))
    except (OSError, ValueError, KeyError, TypeError, AttributeError, TreeError) as e:
        logger.error("Failed to load tree %s: %s", args.tree, e)
        print(f"checktree: cannot load {args.tree}: {e}", file=sys.stderr)
        return 2
    logger.info("Loaded tree: %s (%d nodes)", args.tree, len(state.index))

    if args.query:
        state.set_query(args.query)
        logger.info("Applied query %r (no matches: %s)", args.query, state.no_matches)
    for node_id in args.select:
        state.toggle_select(node_id, True)
        logger.info("Checked %s", node_id)
    for node_id in args.deselect:
        state.toggle_select(node_id, False)
        logger.info("Unchecked %s", node_id)
    if args.expand_all:
        state.expand_all()

    summary = state.serialize()
    summary["no_matches"] = state.no_matches
    summary["visible"] = tree_to_dicts(state.visible_tree)
    print(json.dumps(summary, indent=2))
    return 0


if __name__ == '__main__':
    sys.exit(main())
