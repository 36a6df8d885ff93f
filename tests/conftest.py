"""Shared pytest configuration and fixtures."""

from __future__ import annotations

from typing import Any

import pytest

from nitisure_ingest.errors import ProvisioningError
from nitisure_ingest.index.base import VectorIndexBase
from nitisure_ingest.index.models import CollectionSpec, IndexEntry


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring external services")


# ── Fakes for deterministic testing ─────────────────────────────────────


class FakeVectorIndex(VectorIndexBase):
    """In-memory index that records every call."""

    def __init__(self, collections: dict[str, CollectionSpec | None] | None = None) -> None:
        self.collections: dict[str, CollectionSpec | None] = dict(collections or {})
        self.entries: dict[str, dict[str, IndexEntry]] = {}
        self.create_calls: list[CollectionSpec] = []
        self.upsert_calls: list[tuple[str, IndexEntry]] = []
        self.fail_upsert_for: set[str] = set()
        self.unreachable = False

    def list_collections(self) -> list[str]:
        if self.unreachable:
            raise ProvisioningError("connection refused")
        return list(self.collections)

    def get_collection_spec(self, name: str) -> CollectionSpec | None:
        return self.collections[name]

    def create_collection(self, spec: CollectionSpec) -> None:
        self.create_calls.append(spec)
        self.collections[spec.name] = spec

    def upsert(self, collection_name: str, entry: IndexEntry) -> None:
        self.upsert_calls.append((collection_name, entry))
        if entry.payload.get("section") in self.fail_upsert_for:
            raise RuntimeError(f"write rejected for {entry.payload['section']}")
        self.entries.setdefault(collection_name, {})[entry.id] = entry


class FakeEmbedder:
    """Returns a constant vector; can be told to fail or mis-size for given texts."""

    model = "fake-model"

    def __init__(self, dim: int = 768) -> None:
        self.dim = dim
        self.calls: list[str] = []
        self.fail_when: list[str] = []
        self.wrong_size_when: list[str] = []

    def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        if any(marker in text for marker in self.fail_when):
            raise RuntimeError("503 Service Unavailable")
        if any(marker in text for marker in self.wrong_size_when):
            return [0.5] * (self.dim - 1)
        return [0.1] * self.dim


class RecordingPacer:
    def __init__(self) -> None:
        self.observed: list[BaseException | None] = []
        self.waits = 0

    def observe(self, error: BaseException | None) -> None:
        self.observed.append(error)

    def wait(self) -> None:
        self.waits += 1


def make_record(section: str = "Section 1", text_th: str = "ข้อความ", **extra: Any) -> dict[str, str]:
    record = {
        "act_name_thai": "ประมวลกฎหมายอาญา",
        "act_name_eng": "Criminal Code",
        "section_number_thai": "มาตรา 1",
        "section_number_eng": section,
        "text_th": text_th,
        "text_eng": "English text",
        "notes_thai": "คำอธิบาย",
        "notes_eng": "Explanation",
        "keywords_th": "คำสำคัญ",
        "keywords_eng": "keyword",
        "related_cases": "ฎีกา 1234/2560",
        "law_category": "criminal",
        "source_url": "https://example.go.th/law/1",
    }
    record.update(extra)
    return record


@pytest.fixture()
def collection() -> CollectionSpec:
    return CollectionSpec(name="nitisure_laws", size=768)


@pytest.fixture()
def fake_index() -> FakeVectorIndex:
    return FakeVectorIndex()


@pytest.fixture()
def fake_embedder() -> FakeEmbedder:
    return FakeEmbedder()


@pytest.fixture()
def pacer() -> RecordingPacer:
    return RecordingPacer()
