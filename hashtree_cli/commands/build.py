"""
CLI Build Command

Build a tree from values given on the command line and report its root.

Usage:
    hashtree build <hash-1> ... <hash-n>
    hashtree build --raw <text-1> ... <text-n> [--print] [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from dataclasses import dataclass, asdict
from typing import Any, Sequence

from hashtree.merkle import HashTree
from hashtree_cli.console import render_tree


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


@dataclass
class BuildSummary:
    """Summary of a built tree for CLI output."""
    root: str = ""
    depth: int = 0
    leaves: int = 0
    capacity: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def build_tree(values: Sequence[str], raw: bool) -> HashTree:
    logger.info("Building tree from %d %s values", len(values), "raw" if raw else "hashed")
    return HashTree.build(values, raw=raw)


def build_cmd(args: Namespace) -> int:
    """Handle build command."""
    tree = build_tree(args.values, args.raw)
    summary = BuildSummary(
        root=tree.root,
        depth=tree.depth,
        leaves=tree.inserted_count,
        capacity=tree.capacity,
    )

    if args.json:
        data = summary.to_dict()
        if args.print:
            data["levels"] = tree.levels()
        print(json.dumps(data, indent=2))
        return EXIT_SUCCESS

    print(f"Root:     {summary.root}")
    print(f"Depth:    {summary.depth}")
    print(f"Leaves:   {summary.leaves} (capacity {summary.capacity})")
    if args.print:
        print()
        for line in render_tree(tree):
            print(line)
    return EXIT_SUCCESS
