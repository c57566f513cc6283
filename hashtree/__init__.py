"""
hashtree - incremental Merkle tree with inclusion proofs.
"""

from hashtree.crypto import combine, hash_text
from hashtree.merkle import HashTree, verify_inclusion_proof
from hashtree.schemas import (
    EmptyTreeError,
    HashTreeException,
    InclusionProof,
    LeafIndexError,
    ProofLengthMismatch,
)

__version__ = "0.1.0"

__all__ = [
    "HashTree",
    "InclusionProof",
    "verify_inclusion_proof",
    "hash_text",
    "combine",
    "HashTreeException",
    "LeafIndexError",
    "EmptyTreeError",
    "ProofLengthMismatch",
]
