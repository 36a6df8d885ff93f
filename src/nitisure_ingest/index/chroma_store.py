"""Chroma implementation of the vector-index abstraction.

Chroma infers dimensionality from the first insert, so the configured
size is recorded in the collection metadata under ``"dimension"`` to
allow the provisioner to validate it later.
"""

from __future__ import annotations

import logging
from typing import Any

from nitisure_ingest.errors import IndexWriteError, ProvisioningError
from nitisure_ingest.index.base import VectorIndexBase
from nitisure_ingest.index.models import CollectionSpec, Distance, IndexEntry

logger = logging.getLogger(__name__)

_TO_CHROMA = {
    Distance.COSINE: "cosine",
    Distance.EUCLID: "l2",
    Distance.DOT: "ip",
}
_FROM_CHROMA = {v: k for k, v in _TO_CHROMA.items()}


def _flat_metadata(payload: dict[str, Any]) -> dict[str, Any]:
    """Chroma metadata values must be flat str/int/float/bool."""
    return {k: v for k, v in payload.items() if isinstance(v, (str, int, float, bool))}


class ChromaVectorIndex(VectorIndexBase):
    """Chroma-backed vector index.

    Parameters
    ----------
    host:
        Chroma server hostname.
    port:
        Chroma server port.
    client:
        Pre-built Chroma client; when given, *host* and *port* are ignored.
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 8000,
        *,
        client: Any | None = None,
    ) -> None:
        if client is None:
            import chromadb

            client = chromadb.HttpClient(host=host, port=port)
        self._client = client
        self._collections: dict[str, Any] = {}

    # -- VectorIndexBase overrides --------------------------------------------

    def list_collections(self) -> list[str]:
        try:
            collections = self._client.list_collections()
        except Exception as exc:
            raise ProvisioningError(f"Could not list Chroma collections: {exc}") from exc
        # chromadb >= 0.6 returns names, older releases return Collection objects.
        return [c if isinstance(c, str) else c.name for c in collections]

    def get_collection_spec(self, name: str) -> CollectionSpec | None:
        try:
            collection = self._client.get_collection(name)
        except Exception as exc:
            raise ProvisioningError(f"Could not describe Chroma collection {name!r}: {exc}") from exc

        meta = collection.metadata or {}
        size = meta.get("dimension")
        distance = _FROM_CHROMA.get(meta.get("hnsw:space", "l2"))
        if size is None or distance is None:
            logger.warning("Collection %r has no recorded dimension/metric; skipping config check", name)
            return None
        return CollectionSpec(name=name, size=int(size), distance=distance)

    def create_collection(self, spec: CollectionSpec) -> None:
        try:
            self._client.create_collection(
                name=spec.name,
                metadata={"hnsw:space": _TO_CHROMA[spec.distance], "dimension": spec.size},
            )
        except Exception as exc:
            raise ProvisioningError(f"Could not create Chroma collection {spec.name!r}: {exc}") from exc

    def upsert(self, collection_name: str, entry: IndexEntry) -> None:
        try:
            collection = self._collection(collection_name)
            collection.upsert(
                ids=[entry.id],
                embeddings=[entry.vector],
                metadatas=[_flat_metadata(entry.payload)],
            )
        except Exception as exc:
            raise IndexWriteError(f"Chroma upsert of {entry.id} failed: {exc}") from exc

    # -- internals ------------------------------------------------------------

    def _collection(self, name: str) -> Any:
        if name not in self._collections:
            self._collections[name] = self._client.get_collection(name)
        return self._collections[name]
