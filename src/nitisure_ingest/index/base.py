"""Abstract base class for vector-index backends.

Adding a new backend (Pinecone, Weaviate, …) only requires subclassing
:class:`VectorIndexBase` and implementing the abstract methods.  The
provisioner and orchestrator are backend-agnostic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from nitisure_ingest.index.models import CollectionSpec, IndexEntry


class VectorIndexBase(ABC):
    """Backend-agnostic vector-index interface.

    Implementations translate client-library failures into
    :class:`~nitisure_ingest.errors.ProvisioningError` (collection
    operations) or :class:`~nitisure_ingest.errors.IndexWriteError`
    (upserts).
    """

    # -- required overrides ---------------------------------------------------

    @abstractmethod
    def list_collections(self) -> list[str]:
        """Return the names of all existing collections."""
        ...

    @abstractmethod
    def get_collection_spec(self, name: str) -> CollectionSpec | None:
        """Return the configured size / metric of *name*.

        ``None`` means the backend cannot report it, in which case the
        provisioner skips validation.
        """
        ...

    @abstractmethod
    def create_collection(self, spec: CollectionSpec) -> None:
        """Create the collection described by *spec*."""
        ...

    @abstractmethod
    def upsert(self, collection_name: str, entry: IndexEntry) -> None:
        """Insert or overwrite a single entry keyed by ``entry.id``."""
        ...

    # -- optional overrides ---------------------------------------------------

    def collection_exists(self, name: str) -> bool:
        return name in self.list_collections()
