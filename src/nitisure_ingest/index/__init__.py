"""
Index — vector-store backends behind a single interface.

Public surface
--------------
- :class:`VectorIndexBase` — abstract backend (subclass for Pinecone, etc.).
- :class:`QdrantVectorIndex` — reference Qdrant backend.
- :class:`ChromaVectorIndex` — Chroma backend.
- :class:`CollectionSpec`, :class:`IndexEntry`, :class:`Distance` — data models.
- :func:`get_vector_index` — build the backend selected in settings.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from nitisure_ingest.index.base import VectorIndexBase
from nitisure_ingest.index.models import CollectionSpec, Distance, IndexEntry

if TYPE_CHECKING:
    from nitisure_ingest.config import Settings

__all__ = [
    "ChromaVectorIndex",
    "CollectionSpec",
    "Distance",
    "IndexEntry",
    "QdrantVectorIndex",
    "VectorIndexBase",
    "get_vector_index",
]


def get_vector_index(config: Settings) -> VectorIndexBase:
    """Return the backend named by ``config.vector_backend``."""
    if config.vector_backend == "qdrant":
        from nitisure_ingest.index.qdrant_store import QdrantVectorIndex

        return QdrantVectorIndex(
            config.qdrant_url,
            api_key=config.qdrant_key.get_secret_value() or None,
        )
    if config.vector_backend == "chroma":
        from nitisure_ingest.index.chroma_store import ChromaVectorIndex

        return ChromaVectorIndex(config.chroma_host, config.chroma_port)
    raise ValueError(f"Unsupported vector_backend={config.vector_backend!r}")


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import backends to avoid pulling in client libraries at import time."""
    if name == "QdrantVectorIndex":
        from nitisure_ingest.index.qdrant_store import QdrantVectorIndex

        return QdrantVectorIndex
    if name == "ChromaVectorIndex":
        from nitisure_ingest.index.chroma_store import ChromaVectorIndex

        return ChromaVectorIndex
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
