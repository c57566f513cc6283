"""
Test fixtures package for hashtree tests.

Usage:
    from fixtures import make_tree, tamper

    def test_something():
        tree = make_tree(5)
        proof = tree.generate_proof(0)
"""

from .trees import (
    make_values,
    make_digests,
    make_tree,
    tamper,
)

__all__ = [
    "make_values",
    "make_digests",
    "make_tree",
    "tamper",
]
