"""Command-line entry point — one ingestion run from CSV to the vector index.

Usage::

    HF_TOKEN=... QDRANT_URL=... QDRANT_KEY=... python -m nitisure_ingest --source data/laws.csv
"""

from __future__ import annotations

import argparse
import logging

from nitisure_ingest.config import Settings
from nitisure_ingest.errors import PreconditionError
from nitisure_ingest.index import CollectionSpec, Distance, get_vector_index
from nitisure_ingest.ingestion.embedder import get_embedding_client
from nitisure_ingest.ingestion.identity import get_identity_strategy
from nitisure_ingest.ingestion.orchestrator import IngestionOrchestrator, IngestionSummary
from nitisure_ingest.ingestion.pacing import get_pacer
from nitisure_ingest.ingestion.provisioner import ensure_collection
from nitisure_ingest.ingestion.records import read_records

logger = logging.getLogger("nitisure_ingest")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nitisure-ingest",
        description="Embed law-section records and load them into a vector index.",
    )
    parser.add_argument("--source", help="CSV file of law sections (default: SOURCE_PATH)")
    parser.add_argument("--collection", help="Target collection (default: QDRANT_COLLECTION)")
    parser.add_argument("--backend", choices=["qdrant", "chroma"], help="Vector index backend")
    parser.add_argument("--identity", choices=["stable", "random"], help="Index entry identity strategy")
    parser.add_argument("--pacing", choices=["fixed", "adaptive"], help="Inter-record pacing policy")
    parser.add_argument("--delay", type=float, help="Seconds to wait between records")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    return parser


def apply_overrides(config: Settings, args: argparse.Namespace) -> Settings:
    """Return a copy of *config* with the CLI flags that were given applied."""
    overrides = {
        "source_path": args.source,
        "qdrant_collection": args.collection,
        "vector_backend": args.backend,
        "identity_strategy": args.identity,
        "pacing": args.pacing,
        "request_delay": args.delay,
    }
    return config.model_copy(update={k: v for k, v in overrides.items() if v is not None})


def run(config: Settings) -> IngestionSummary:
    """Check preconditions, provision the collection and ingest every record.

    Raises
    ------
    PreconditionError
        Missing credentials, absent source file, or an index that cannot
        be provisioned.  Nothing has been written when this is raised.
    """
    config.require_credentials()
    records = read_records(config.source_path)

    spec = CollectionSpec(
        name=config.qdrant_collection,
        size=config.vector_size,
        distance=Distance(config.distance_metric),
    )
    index = get_vector_index(config)
    ensure_collection(index, spec, validate_existing=config.validate_existing_collection)

    orchestrator = IngestionOrchestrator(
        get_embedding_client(config),
        index,
        spec,
        identity=get_identity_strategy(config.identity_strategy),
        pacer=get_pacer(config.pacing, config.request_delay),
    )
    return orchestrator.run(records)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = apply_overrides(Settings(), args)
    logger.info("Reading records from %s", config.source_path)
    try:
        summary = run(config)
    except PreconditionError as exc:
        logger.error("Aborting before ingestion: %s", exc)
        return 1

    logger.info("INGESTION COMPLETE: %s", summary)
    return 0
