"""
Core cryptographic utilities.

Provides the fixed digest function shared by the hash tree and its proofs.
"""
from .hashing import (
    DIGEST_HEX_LENGTH,
    sha256_hex,
    hash_text,
    combine,
    is_hex_digest,
)

__all__ = [
    "DIGEST_HEX_LENGTH",
    "sha256_hex",
    "hash_text",
    "combine",
    "is_hex_digest",
]
