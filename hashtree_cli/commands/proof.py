"""
CLI Proof Command

Generate an inclusion proof for one leaf slot of a tree built from
values given on the command line.

Usage:
    hashtree proof --index N <hash-1> ... <hash-n>
    hashtree proof --raw --index N <text-1> ... <text-n> [--json]
"""

from __future__ import annotations

import logging
from argparse import Namespace

from hashtree_cli.commands.build import build_tree


logger = logging.getLogger(__name__)


EXIT_SUCCESS = 0


def proof_cmd(args: Namespace) -> int:
    """Handle proof command."""
    tree = build_tree(args.values, args.raw)
    proof = tree.prove(args.index)
    logger.info("Generated proof for leaf %d (%d siblings)", args.index, proof.depth)

    if args.json:
        print(proof.model_dump_json(indent=2))
        return EXIT_SUCCESS

    print(f"Leaf:     {proof.leaf}")
    print(f"Index:    {proof.index}")
    print(f"Root:     {proof.root}")
    print("Siblings:")
    for sibling in proof.siblings:
        print(f"  {sibling}")
    return EXIT_SUCCESS
