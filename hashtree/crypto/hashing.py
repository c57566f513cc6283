"""
Hashing Utilities
Digest function used by tree maintenance and the proof protocol.

This module provides:
- SHA-256 hashing of raw bytes rendered as lowercase hex
- Leaf hashing for raw text
- Order-sensitive combination of two digests into a parent digest

Determinism Notes:
- Digests are compared as exact strings
- Combination hashes the concatenated digest strings with no separator,
  so combine(a, b) != combine(b, a) for a != b
"""
from __future__ import annotations

import hashlib
import string


DIGEST_HEX_LENGTH = 64

_HEX_CHARS = frozenset(string.hexdigits)


def sha256_hex(data: bytes) -> str:
    """
    Compute the SHA-256 digest of raw bytes as lowercase hex.

    Args:
        data: Raw bytes to hash

    Returns:
        64-character lowercase hex digest

    Example:
        >>> sha256_hex(b"hello")
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).hexdigest()


def hash_text(text: str) -> str:
    """
    Hash a raw text value into a leaf digest.

    Rule: leaf = sha256(text.encode("utf-8"))

    Lone surrogates (undecodable bytes from argv or a C-locale stdin)
    are encoded back to their original bytes.

    Args:
        text: Raw value as typed by the caller

    Returns:
        64-character lowercase hex digest
    """
    return sha256_hex(text.encode("utf-8", errors="surrogateescape"))


def combine(left: str, right: str) -> str:
    """
    Combine two child digests into their parent digest.

    Rule: parent = sha256((left + right).encode("utf-8"))

    Args:
        left: Left child digest
        right: Right child digest

    Returns:
        64-character lowercase hex digest of the concatenation
    """
    return sha256_hex((left + right).encode("utf-8", errors="surrogateescape"))


def is_hex_digest(value: str) -> bool:
    """Check whether a value looks like a hex-encoded SHA-256 digest."""
    return len(value) == DIGEST_HEX_LENGTH and all(c in _HEX_CHARS for c in value)


__all__ = [
    "DIGEST_HEX_LENGTH",
    "sha256_hex",
    "hash_text",
    "combine",
    "is_hex_digest",
]
