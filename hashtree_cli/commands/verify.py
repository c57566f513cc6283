"""
CLI Verify Command

Verify an inclusion proof against a tree built from values given on the
command line.

Usage:
    hashtree verify --index N --leaf DIGEST --proof P1 --proof P2 <hash-1> ... <hash-n>
    hashtree verify --raw --raw-leaf --index N --leaf TEXT --proof P1 <text-1> ... <text-n>
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace

from hashtree.crypto.hashing import hash_text
from hashtree_cli.commands.build import build_tree


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_VERIFICATION_FAILED = 2


def verify_cmd(args: Namespace) -> int:
    """Handle verify command."""
    tree = build_tree(args.values, args.raw)
    leaf = hash_text(args.leaf) if args.raw_leaf else args.leaf
    proof = args.proof or []

    verified = tree.verify(proof, leaf, args.index)
    logger.info("Verification of leaf %d against %s: %s", args.index, tree.root, verified)

    if args.json:
        print(json.dumps({
            "verified": verified,
            "index": args.index,
            "leaf": leaf,
            "root": tree.root,
        }, indent=2))
    elif verified:
        print("Proof has been verified")
    else:
        print("Proof has not been verified")

    return EXIT_SUCCESS if verified else EXIT_VERIFICATION_FAILED
