"""
Schemas
File: proof.py

Purpose: Inclusion proof schema for structured output.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class InclusionProof(BaseModel):
    """
    An inclusion proof for a single leaf slot of a hash tree.

    Siblings are ordered from the leaf level up to the children of the
    root. The leaf index decides, level by level, which side each
    sibling is combined on.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    leaf: str = Field(..., description="Digest stored in the proven leaf slot")
    index: int = Field(..., description="Zero-based leaf slot index", ge=0)
    siblings: list[str] = Field(default_factory=list, description="Sibling digests, bottom-up")
    root: str = Field(..., description="Root digest the proof was generated against", min_length=1)

    @property
    def depth(self) -> int:
        """Number of levels the proof climbs."""
        return len(self.siblings)
