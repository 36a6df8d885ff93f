"""
Ingestion — law-section records into embedded index entries.

This package reads CSV rows, composes the canonical text for each
law section, embeds it and upserts the result into the vector index,
one record at a time.
"""

from nitisure_ingest.ingestion.composer import build_payload, compose
from nitisure_ingest.ingestion.orchestrator import IngestionOrchestrator, IngestionSummary, RecordState
from nitisure_ingest.ingestion.provisioner import ensure_collection
from nitisure_ingest.ingestion.records import is_eligible, read_records

__all__ = [
    "IngestionOrchestrator",
    "IngestionSummary",
    "RecordState",
    "build_payload",
    "compose",
    "ensure_collection",
    "is_eligible",
    "read_records",
]
