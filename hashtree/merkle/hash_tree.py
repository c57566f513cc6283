"""
Hash Tree Implementation
Incremental Merkle tree kept as a complete binary tree in array form.

Layout:
- Node ``i`` has children at ``2i + 1`` and ``2i + 2``; the root is at 0
- At depth ``d`` the tree has ``2**d`` leaf slots at positions
  ``[2**d - 1, 2**(d + 1) - 2]`` preceded by ``2**d - 1`` internal nodes
- Leaf slots not yet backed by a real insertion (padding) hold copies of
  the leaf digest that opened the current level's free slots

Growth Rules:
1. The first insertion allocates a depth-1 tree
2. Inserting when the leaf count is a power of two (other than 1) doubles
   the capacity; the new internal positions are prepended to the array
3. Leaves are never removed; padding copies are replaced as leaves arrive

Insertion order is part of the commitment: the same values in a
different order produce a different root.
"""
from __future__ import annotations

import logging
from typing import Iterable

from hashtree.crypto.hashing import combine, hash_text
from hashtree.merkle.merkle_proofs import collect_siblings, compute_root
from hashtree.schemas.errors import EmptyTreeError, LeafIndexError, ProofLengthMismatch
from hashtree.schemas.proof import InclusionProof


logger = logging.getLogger(__name__)


# Value held by freshly allocated internal positions until the next rehash
PLACEHOLDER = ""


def _is_power_of_two(n: int) -> bool:
    return n > 0 and n & (n - 1) == 0


class HashTree:
    """
    Array-form Merkle tree with incremental insertion.

    Attributes:
        elements: Node digests in array form (root first)
        inserted_count: Number of real leaves added so far
        depth: Number of leaf levels below the root (0 when empty)

    Example:
        >>> tree = HashTree.build(["a", "b", "c"], raw=True)
        >>> proof = tree.generate_proof(1)
        >>> tree.verify(proof, hash_text("b"), 1)
        True
    """

    def __init__(self) -> None:
        self.elements: list[str] = []
        self.inserted_count = 0
        self.depth = 0

    @classmethod
    def build(cls, values: Iterable[str], raw: bool = False) -> HashTree:
        """
        Build a tree by inserting values in order.

        Args:
            values: Leaf digests, or raw text when ``raw`` is set
            raw: Hash each value before inserting it

        Returns:
            A new populated tree
        """
        tree = cls()
        for value in values:
            if raw:
                tree.add_unhashed(value)
            else:
                tree.add(value)
        logger.debug("Built tree with %d leaves, depth %d", tree.inserted_count, tree.depth)
        return tree

    # -------------------------------------------------------------------------
    # Shape
    # -------------------------------------------------------------------------

    @property
    def capacity(self) -> int:
        """Total number of leaf slots, real and padding."""
        if self.depth == 0:
            return 0
        return 1 << self.depth

    @property
    def internal_node_count(self) -> int:
        return (1 << self.depth) - 1

    @property
    def is_empty(self) -> bool:
        return self.inserted_count == 0

    @property
    def root(self) -> str:
        """
        Root digest of the tree.

        Raises:
            EmptyTreeError: If nothing has been inserted
        """
        if self.is_empty:
            raise EmptyTreeError("read the root of")
        return self.elements[0]

    @property
    def leaves(self) -> list[str]:
        """All leaf slots, including padding copies."""
        return self.elements[self.internal_node_count:]

    def leaf(self, leaf_index: int) -> str:
        """Digest held in a leaf slot."""
        self._check_leaf_index(leaf_index, "read a leaf of")
        return self.elements[self.internal_node_count + leaf_index]

    def levels(self) -> list[list[str]]:
        """Node digests grouped by level, root first."""
        if self.is_empty:
            return []
        rows: list[list[str]] = []
        for level in range(self.depth + 1):
            start = (1 << level) - 1
            rows.append(self.elements[start:2 * start + 1])
        return rows

    def __len__(self) -> int:
        return self.inserted_count

    def __repr__(self) -> str:
        return (
            f"HashTree(inserted_count={self.inserted_count}, depth={self.depth}, "
            f"root={self.elements[0] if self.elements else None!r})"
        )

    # -------------------------------------------------------------------------
    # Tree maintenance
    # -------------------------------------------------------------------------

    def add_unhashed(self, text: str) -> None:
        """Hash a raw value and insert the resulting digest."""
        self.add(hash_text(text))

    def add(self, digest: str) -> None:
        """
        Insert a leaf digest.

        Runs the three insertion steps: expand capacity when full, place
        the digest in the next leaf slot, then recompute ancestors.

        Args:
            digest: Leaf digest, stored as given
        """
        expanded = self._expand()
        slot = self._place(digest)
        self.inserted_count += 1

        if expanded or slot is None:
            self.rehash()
        else:
            self._rehash_path(slot)

        logger.debug(
            "Added leaf %d (depth=%d, capacity=%d)",
            self.inserted_count - 1, self.depth, self.capacity,
        )

    def rehash(self) -> None:
        """
        Recompute every internal digest.

        Walks positions from the last to the first so children are final
        before their parent is recomputed.
        """
        for index in range(len(self.elements) - 1, -1, -1):
            self._rehash_node(index)

    def _expand(self) -> bool:
        """Grow the array when the next insertion needs a new level."""
        count = self.inserted_count

        if count == 0:
            self.depth = 1
            self.elements = [PLACEHOLDER]
            return True

        # Two leaves still fit at depth 1
        if count == 1:
            return False

        if not _is_power_of_two(count):
            return False

        self.depth += 1
        self.elements[0:0] = [PLACEHOLDER] * count
        logger.debug("Expanded tree to depth %d (capacity %d)", self.depth, self.capacity)
        return True

    def _place(self, digest: str) -> int | None:
        """
        Put a digest into the next leaf slot.

        Returns:
            Array position the digest now occupies, or None when several
            slots were written
        """
        internal = self.internal_node_count
        gap = self.capacity - (self.inserted_count + 1)
        copies = len(self.elements) - self.inserted_count - internal

        if gap > 0 and copies == 0:
            # Fresh level: fill every free slot with this digest
            self.elements.extend([digest] * gap)
            self.elements.append(digest)
            return None

        if gap <= 0:
            # Last free slot
            self.elements.pop()
            self.elements.append(digest)
            return len(self.elements) - 1

        position = internal + self.inserted_count
        self.elements.pop()
        self.elements.insert(position, digest)
        return position

    def _rehash_node(self, index: int) -> None:
        left = 2 * index + 1
        right = left + 1
        size = len(self.elements)

        if right < size:
            self.elements[index] = combine(self.elements[left], self.elements[right])
        elif left < size:
            self.elements[index] = self.elements[left]

    def _rehash_path(self, position: int) -> None:
        """Recompute the ancestors of a single changed position."""
        while position > 0:
            position = (position - 1) // 2
            self._rehash_node(position)

    # -------------------------------------------------------------------------
    # Proof protocol
    # -------------------------------------------------------------------------

    def generate_proof(self, leaf_index: int) -> list[str]:
        """
        Generate the inclusion proof for a leaf slot.

        Args:
            leaf_index: Zero-based leaf slot in ``[0, capacity)``

        Returns:
            Sibling digests from the leaf level up to the children of the root

        Raises:
            EmptyTreeError: If nothing has been inserted
            LeafIndexError: If the index is outside the tree capacity
        """
        self._check_leaf_index(leaf_index, "generate a proof for")
        return collect_siblings(self.elements, self.depth, leaf_index)

    def prove(self, leaf_index: int) -> InclusionProof:
        """Generate a proof bundled with its leaf digest and the current root."""
        siblings = self.generate_proof(leaf_index)
        return InclusionProof(
            leaf=self.leaf(leaf_index),
            index=leaf_index,
            siblings=siblings,
            root=self.root,
        )

    def verify(self, proof: list[str], leaf: str, index: int) -> bool:
        """
        Verify that ``leaf`` sits at slot ``index`` under the current root.

        Args:
            proof: Sibling digests, bottom-up, as from ``generate_proof``
            leaf: Leaf digest being claimed
            index: Zero-based leaf slot being claimed

        Returns:
            True if the proof folds to the current root

        Raises:
            EmptyTreeError: If nothing has been inserted
            LeafIndexError: If the index is outside the tree capacity
            ProofLengthMismatch: If the proof length differs from the depth
        """
        self._check_leaf_index(index, "verify a proof against")
        if len(proof) != self.depth:
            raise ProofLengthMismatch(actual=len(proof), expected=self.depth)

        verified = compute_root(leaf, index, proof) == self.root
        logger.debug("Verification of leaf %d: %s", index, verified)
        return verified

    def _check_leaf_index(self, leaf_index: int, operation: str) -> None:
        if self.is_empty:
            raise EmptyTreeError(operation)
        if leaf_index < 0 or leaf_index >= self.capacity:
            raise LeafIndexError(leaf_index, self.capacity)


__all__ = [
    "PLACEHOLDER",
    "HashTree",
]
