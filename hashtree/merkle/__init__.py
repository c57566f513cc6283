"""
Hash Tree and Inclusion Proofs
Incremental array-form Merkle tree with proof generation/verification.

This package provides:
- HashTree: tree maintenance (growth, leaf placement, rehash) and proofs
- collect_siblings / compute_root: the two halves of the proof protocol
- verify_inclusion_proof: check a bundled InclusionProof against a tree

Commitment Rules:
1. Leaf hashing: leaf = sha256(text.encode("utf-8")) for raw values
2. Parent hashing: parent = sha256((left + right).encode("utf-8")) on hex digests
3. Padding: free leaf slots hold copies of an inserted leaf digest
4. Capacity doubles when the leaf count passes a power of two

Usage:
    from hashtree.merkle import HashTree
    from hashtree.crypto import hash_text

    tree = HashTree.build(["Merkle Tree", "Ralph Merkle"], raw=True)
    proof = tree.generate_proof(1)
    assert tree.verify(proof, hash_text("Ralph Merkle"), 1)
"""
from .hash_tree import PLACEHOLDER, HashTree
from .merkle_proofs import (
    collect_siblings,
    compute_root,
    verify_inclusion_proof,
)


__all__ = [
    "PLACEHOLDER",
    "HashTree",
    "collect_siblings",
    "compute_root",
    "verify_inclusion_proof",
]
