"""Exception taxonomy for the ingestion run.

Two families matter to callers:

* :class:`PreconditionError` — the run cannot start (missing credentials,
  absent source, unreachable or mismatched index).  Fatal.
* :class:`RecordError` — one record could not be embedded or written.
  Isolated by the orchestrator; the run continues.
"""

from __future__ import annotations


class IngestError(RuntimeError):
    """Base class for every error raised by ``nitisure_ingest``."""


# -- precondition (fatal) -----------------------------------------------------


class PreconditionError(IngestError):
    """Raised before any record is processed; aborts the run."""


class MissingCredentialsError(PreconditionError):
    """Required credentials or endpoints are not configured."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"Missing required configuration: {', '.join(self.missing)}")


class SourceNotFoundError(PreconditionError):
    """The record source file does not exist."""


class ProvisioningError(PreconditionError):
    """The index service rejected collection listing or creation."""


class CollectionMismatchError(ProvisioningError):
    """An existing collection's vector size or metric differs from the expected one."""


# -- per record (isolated) ----------------------------------------------------


class RecordError(IngestError):
    """A single record failed; the run carries on with the next one."""


class EmbeddingError(RecordError):
    """The embedding client failed or returned a malformed vector."""


class DimensionMismatchError(EmbeddingError):
    """The embedding vector length differs from the collection dimensionality."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Embedding has {actual} dimensions, collection expects {expected}")


class IndexWriteError(RecordError):
    """The vector index rejected an upsert."""
