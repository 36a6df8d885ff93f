"""Qdrant implementation of the vector-index abstraction."""

from __future__ import annotations

import logging

from qdrant_client import QdrantClient
from qdrant_client.http import models

from nitisure_ingest.errors import IndexWriteError, ProvisioningError
from nitisure_ingest.index.base import VectorIndexBase
from nitisure_ingest.index.models import CollectionSpec, Distance, IndexEntry

logger = logging.getLogger(__name__)

_TO_QDRANT = {
    Distance.COSINE: models.Distance.COSINE,
    Distance.EUCLID: models.Distance.EUCLID,
    Distance.DOT: models.Distance.DOT,
}
_FROM_QDRANT = {v: k for k, v in _TO_QDRANT.items()}


class QdrantVectorIndex(VectorIndexBase):
    """Qdrant-backed vector index.

    Parameters
    ----------
    url:
        Qdrant server / cloud URL.
    api_key:
        Qdrant API key (``None`` for an unauthenticated local server).
    client:
        Pre-built ``QdrantClient``; when given, *url* and *api_key* are ignored.
    """

    def __init__(
        self,
        url: str | None = None,
        *,
        api_key: str | None = None,
        client: QdrantClient | None = None,
    ) -> None:
        self._client = client or QdrantClient(url=url, api_key=api_key)

    # -- VectorIndexBase overrides --------------------------------------------

    def list_collections(self) -> list[str]:
        try:
            result = self._client.get_collections()
        except Exception as exc:
            raise ProvisioningError(f"Could not list Qdrant collections: {exc}") from exc
        return [c.name for c in result.collections]

    def get_collection_spec(self, name: str) -> CollectionSpec | None:
        try:
            info = self._client.get_collection(collection_name=name)
        except Exception as exc:
            raise ProvisioningError(f"Could not describe Qdrant collection {name!r}: {exc}") from exc

        params = info.config.params.vectors
        if not isinstance(params, models.VectorParams):
            # Named / multi-vector collections have no single size to compare.
            logger.warning("Collection %r uses named vectors; skipping config check", name)
            return None
        distance = _FROM_QDRANT.get(params.distance)
        if distance is None:
            logger.warning("Collection %r uses unsupported metric %s", name, params.distance)
            return None
        return CollectionSpec(name=name, size=params.size, distance=distance)

    def create_collection(self, spec: CollectionSpec) -> None:
        try:
            self._client.create_collection(
                collection_name=spec.name,
                vectors_config=models.VectorParams(
                    size=spec.size,
                    distance=_TO_QDRANT[spec.distance],
                ),
            )
        except Exception as exc:
            raise ProvisioningError(f"Could not create Qdrant collection {spec.name!r}: {exc}") from exc

    def upsert(self, collection_name: str, entry: IndexEntry) -> None:
        try:
            self._client.upsert(
                collection_name=collection_name,
                points=[
                    models.PointStruct(
                        id=entry.id,
                        vector=entry.vector,
                        payload=entry.payload,
                    )
                ],
            )
        except Exception as exc:
            raise IndexWriteError(f"Qdrant upsert of {entry.id} failed: {exc}") from exc
