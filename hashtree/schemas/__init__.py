"""
Schemas for the hash tree: error taxonomy and proof model.
"""

from .errors import (
    ErrorCodes,
    HashTreeError,
    HashTreeException,
    LeafIndexError,
    EmptyTreeError,
    ProofLengthMismatch,
    ParseError,
    ArgumentCountError,
    UnknownCommandError,
)
from .proof import InclusionProof

__all__ = [
    "ErrorCodes",
    "HashTreeError",
    "HashTreeException",
    "LeafIndexError",
    "EmptyTreeError",
    "ProofLengthMismatch",
    "ParseError",
    "ArgumentCountError",
    "UnknownCommandError",
    "InclusionProof",
]
