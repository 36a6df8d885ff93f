"""Ingestion orchestrator — the per-record control loop.

Each record moves through::

    PENDING ─┬─> SKIPPED                       (no primary text)
             └─> EMBEDDING ─┬─> FAILED         (embedding error / wrong size)
                            └─> WRITING ─┬─> FAILED   (index error)
                                         └─> DONE

Records are handled strictly in source order, one at a time.  A failure
is logged and counted; it never stops the run, and neither does an
exception raised by the ``on_record`` observer.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum

from nitisure_ingest.errors import DimensionMismatchError
from nitisure_ingest.index.base import VectorIndexBase
from nitisure_ingest.index.models import CollectionSpec, IndexEntry
from nitisure_ingest.ingestion.composer import build_payload, compose
from nitisure_ingest.ingestion.embedder import EmbeddingClient
from nitisure_ingest.ingestion.identity import IdentityStrategy, stable_identity
from nitisure_ingest.ingestion.pacing import FixedDelayPacer, Pacer
from nitisure_ingest.ingestion.records import Record, is_eligible, record_label

logger = logging.getLogger(__name__)


class RecordState(str, Enum):
    PENDING = "pending"
    SKIPPED = "skipped"
    EMBEDDING = "embedding"
    WRITING = "writing"
    DONE = "done"
    FAILED = "failed"


@dataclass
class IngestionSummary:
    """Totals reported when the record source is exhausted."""

    seen: int = 0
    skipped: int = 0
    succeeded: int = 0
    failed: int = 0

    def as_dict(self) -> dict[str, int]:
        return {
            "seen": self.seen,
            "skipped": self.skipped,
            "succeeded": self.succeeded,
            "failed": self.failed,
        }

    def __str__(self) -> str:
        return (
            f"seen={self.seen} skipped={self.skipped} "
            f"succeeded={self.succeeded} failed={self.failed}"
        )


class IngestionOrchestrator:
    """Sequence composer → embedder → index writer over a record stream.

    Parameters
    ----------
    embedder:
        Turns composed text into a vector.
    index:
        Backend receiving one upsert per successful record.
    collection:
        Target collection; its ``size`` is the required vector length.
    identity:
        Maps a record to its index-entry ID.
    pacer:
        Decides how long to wait before the record following an embedded
        one.  No wait follows the last record.
    on_record:
        Optional observer called with ``(record, final_state)``.
    """

    def __init__(
        self,
        embedder: EmbeddingClient,
        index: VectorIndexBase,
        collection: CollectionSpec,
        *,
        identity: IdentityStrategy = stable_identity,
        pacer: Pacer | None = None,
        on_record: Callable[[Record, RecordState], None] | None = None,
    ) -> None:
        self.embedder = embedder
        self.index = index
        self.collection = collection
        self.identity = identity
        self.pacer = pacer if pacer is not None else FixedDelayPacer()
        self.on_record = on_record

    # -- public API -----------------------------------------------------------

    def run(self, records: Iterable[Record]) -> IngestionSummary:
        """Process every record in order and return the totals."""
        summary = IngestionSummary()
        logger.info("Starting ingestion into %s", self.collection.name)
        pace_next = False

        for position, record in enumerate(records, 1):
            # The delay owed by the previous embedded record is paid before this one.
            if pace_next:
                self.pacer.wait()
            summary.seen += 1
            state = self.process(record, position)
            pace_next = state is not RecordState.SKIPPED

            if state is RecordState.SKIPPED:
                summary.skipped += 1
            elif state is RecordState.DONE:
                summary.succeeded += 1
            else:
                summary.failed += 1

            if self.on_record is not None:
                self._notify(record, state, position)

        return summary

    def process(self, record: Record, position: int | None = None) -> RecordState:
        """Take one record to a final state (``SKIPPED``, ``DONE`` or ``FAILED``).

        Pacing delays are applied by :meth:`run`, between records.
        """
        if not is_eligible(record):
            logger.debug("Skipping %s: no primary text", record_label(record, position))
            return RecordState.SKIPPED

        label = record_label(record, position)
        logger.info("Processing: %s", label)

        state = RecordState.EMBEDDING
        error: Exception | None = None
        try:
            vector = self._embed(compose(record))
            state = RecordState.WRITING
            entry = IndexEntry(id=self.identity(record), vector=vector, payload=build_payload(record))
            self.index.upsert(self.collection.name, entry)
            state = RecordState.DONE
            logger.info("Uploaded %s", label)
        except Exception as exc:
            error = exc
            logger.error("Failed %s during %s: %s", label, state.value, exc)
            state = RecordState.FAILED

        self.pacer.observe(error)
        return state

    # -- internals ------------------------------------------------------------

    def _notify(self, record: Record, state: RecordState, position: int) -> None:
        try:
            self.on_record(record, state)
        except Exception:
            logger.exception("on_record observer failed for %s", record_label(record, position))

    def _embed(self, text: str) -> list[float]:
        vector = self.embedder.embed(text)
        if len(vector) != self.collection.size:
            raise DimensionMismatchError(self.collection.size, len(vector))
        return vector
