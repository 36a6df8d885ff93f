"""Index provisioning — make sure the target collection exists before writing."""

from __future__ import annotations

import logging

from nitisure_ingest.errors import CollectionMismatchError
from nitisure_ingest.index.base import VectorIndexBase
from nitisure_ingest.index.models import CollectionSpec

logger = logging.getLogger(__name__)


def ensure_collection(
    index: VectorIndexBase,
    spec: CollectionSpec,
    *,
    validate_existing: bool = True,
) -> bool:
    """Create ``spec.name`` in *index* unless it already exists.

    Parameters
    ----------
    index:
        Backend to provision.
    spec:
        Expected collection name, vector size and distance metric.
    validate_existing:
        When the collection already exists, compare its size / metric
        with *spec* and fail on mismatch.

    Returns
    -------
    bool
        ``True`` if the collection was created by this call.

    Raises
    ------
    ProvisioningError
        The backend could not list, describe or create collections.
    CollectionMismatchError
        The existing collection is configured differently from *spec*.
    """
    if not index.collection_exists(spec.name):
        logger.info("Creating collection: %s (size=%d, distance=%s)", spec.name, spec.size, spec.distance.value)
        index.create_collection(spec)
        return True

    if validate_existing:
        existing = index.get_collection_spec(spec.name)
        if existing is None:
            logger.warning("Cannot read configuration of %r; skipping validation", spec.name)
        elif not existing.matches(spec):
            raise CollectionMismatchError(
                f"Collection {spec.name!r} has size={existing.size}, distance={existing.distance.value}; "
                f"expected size={spec.size}, distance={spec.distance.value}"
            )

    logger.info("Collection %s already exists", spec.name)
    return False
