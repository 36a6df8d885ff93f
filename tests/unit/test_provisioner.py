"""Unit tests for collection provisioning."""

from __future__ import annotations

import pytest
from conftest import FakeVectorIndex

from nitisure_ingest.errors import CollectionMismatchError, PreconditionError, ProvisioningError
from nitisure_ingest.index.models import CollectionSpec, Distance
from nitisure_ingest.ingestion.provisioner import ensure_collection


def test_creates_missing_collection(fake_index: FakeVectorIndex, collection: CollectionSpec) -> None:
    assert ensure_collection(fake_index, collection) is True
    assert fake_index.create_calls == [collection]


def test_provisioning_is_idempotent(fake_index: FakeVectorIndex, collection: CollectionSpec) -> None:
    """Two invocations result in exactly one create call."""
    ensure_collection(fake_index, collection)
    assert ensure_collection(fake_index, collection) is False
    assert len(fake_index.create_calls) == 1


def test_existing_collection_is_left_alone(collection: CollectionSpec) -> None:
    index = FakeVectorIndex({collection.name: collection, "other": None})
    assert ensure_collection(index, collection) is False
    assert index.create_calls == []


def test_size_mismatch_fails_fast(collection: CollectionSpec) -> None:
    existing = CollectionSpec(name=collection.name, size=384)
    index = FakeVectorIndex({collection.name: existing})

    with pytest.raises(CollectionMismatchError, match="size=384"):
        ensure_collection(index, collection)
    assert issubclass(CollectionMismatchError, PreconditionError)


def test_metric_mismatch_fails_fast(collection: CollectionSpec) -> None:
    existing = CollectionSpec(name=collection.name, size=768, distance=Distance.DOT)
    index = FakeVectorIndex({collection.name: existing})

    with pytest.raises(CollectionMismatchError, match="distance=dot"):
        ensure_collection(index, collection)


def test_mismatch_ignored_when_validation_disabled(collection: CollectionSpec) -> None:
    existing = CollectionSpec(name=collection.name, size=384)
    index = FakeVectorIndex({collection.name: existing})
    assert ensure_collection(index, collection, validate_existing=False) is False


def test_unreadable_config_skips_validation(collection: CollectionSpec) -> None:
    index = FakeVectorIndex({collection.name: None})
    assert ensure_collection(index, collection) is False


def test_unreachable_index_is_fatal(fake_index: FakeVectorIndex, collection: CollectionSpec) -> None:
    fake_index.unreachable = True
    with pytest.raises(ProvisioningError, match="connection refused"):
        ensure_collection(fake_index, collection)
    assert fake_index.create_calls == []
