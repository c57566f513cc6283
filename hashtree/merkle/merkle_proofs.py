"""
Merkle Proofs
Inclusion proof generation and verification over the array-form tree.

The two halves form one protocol and must agree node for node:

- Generation walks the physical array. A leaf slot maps to absolute
  index ``leaf_index + 2**depth - 1``. Even absolute indices are right
  children (sibling at ``index - 1``, parent at ``index // 2 - 1``);
  odd ones are left children (sibling at ``index + 1``, parent at
  ``index // 2``).
- Verification walks the logical leaf index. An even logical index is
  a left child, so the running digest goes on the left; an odd one
  goes on the right. The index is halved after each level.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Sequence

from hashtree.crypto.hashing import combine
from hashtree.schemas.proof import InclusionProof

if TYPE_CHECKING:
    from hashtree.merkle.hash_tree import HashTree


logger = logging.getLogger(__name__)


def collect_siblings(elements: Sequence[str], depth: int, leaf_index: int) -> list[str]:
    """
    Collect sibling digests for a leaf slot by walking the array upward.

    Callers are responsible for bounds checking ``leaf_index``.

    Args:
        elements: Array-form tree (root at position 0)
        depth: Number of leaf levels below the root
        leaf_index: Zero-based leaf slot

    Returns:
        Sibling digests from the leaf level up to the children of the root
    """
    index = leaf_index + (1 << depth) - 1
    siblings: list[str] = []

    while index >= 1:
        if index % 2 == 0:
            siblings.append(elements[index - 1])
            index = index // 2 - 1
        else:
            siblings.append(elements[index + 1])
            index = index // 2

    return siblings


def compute_root(leaf: str, index: int, siblings: Sequence[str]) -> str:
    """
    Recompute a root digest from a leaf, its index and its siblings.

    Args:
        leaf: Digest of the leaf being proven
        index: Zero-based leaf slot the digest claims to occupy
        siblings: Sibling digests, bottom-up

    Returns:
        The root digest implied by the proof
    """
    current = leaf
    for sibling in siblings:
        if index % 2 == 0:
            current = combine(current, sibling)
        else:
            current = combine(sibling, current)
        index //= 2
    return current


def verify_inclusion_proof(tree: HashTree, proof: InclusionProof) -> bool:
    """
    Check a bundled proof against the tree's current root.

    A proof generated before later insertions carries a stale root and
    fails here, even when its siblings would still fold to it.

    Raises:
        EmptyTreeError: If the tree has no leaves
        LeafIndexError: If the proof index is outside the tree capacity
        ProofLengthMismatch: If the sibling count differs from the tree depth
    """
    if proof.root != tree.root:
        logger.debug("Proof root %s does not match tree root %s", proof.root, tree.root)
        return False
    return tree.verify(proof.siblings, proof.leaf, proof.index)


__all__ = [
    "collect_siblings",
    "compute_root",
    "verify_inclusion_proof",
]
