"""Domain models for index entries and collection configuration."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class Distance(str, Enum):
    """Distance metric of a collection, named after Qdrant's vocabulary."""

    COSINE = "cosine"
    EUCLID = "euclid"
    DOT = "dot"


class CollectionSpec(BaseModel):
    """Name, dimensionality and distance metric of a vector collection.

    Attributes
    ----------
    name:
        Collection / index namespace.
    size:
        Length every stored vector must have.
    distance:
        Similarity metric used by the index.
    """

    name: str
    size: int = Field(gt=0)
    distance: Distance = Distance.COSINE

    def matches(self, other: CollectionSpec) -> bool:
        """``True`` when *other* has the same size and metric (name ignored)."""
        return self.size == other.size and self.distance == other.distance


class IndexEntry(BaseModel):
    """The unit committed to the vector index.

    ``payload`` carries display / filter fields only; the composed
    embedding text is never stored.
    """

    id: str
    vector: list[float]
    payload: dict[str, Any] = Field(default_factory=dict)
