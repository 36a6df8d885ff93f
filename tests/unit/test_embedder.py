"""Unit tests for the embedding client adapter."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from nitisure_ingest.config import Settings
from nitisure_ingest.errors import EmbeddingError, RecordError
from nitisure_ingest.ingestion.embedder import LangChainEmbeddingClient, get_embedding_client, to_vector


def test_embed_returns_float_vector() -> None:
    embeddings = MagicMock()
    embeddings.embed_query.return_value = [1, 0.5, -2]
    client = LangChainEmbeddingClient(embeddings, "test-model")

    assert client.embed("Law: x") == [1.0, 0.5, -2.0]
    embeddings.embed_query.assert_called_once_with("Law: x")


def test_embed_wraps_backend_errors() -> None:
    embeddings = MagicMock()
    embeddings.embed_query.side_effect = ConnectionError("boom")
    client = LangChainEmbeddingClient(embeddings, "test-model")

    with pytest.raises(EmbeddingError, match="test-model failed: boom") as excinfo:
        client.embed("text")
    assert isinstance(excinfo.value.__cause__, ConnectionError)
    assert isinstance(excinfo.value, RecordError)


def test_to_vector_unwraps_single_row_matrix() -> None:
    assert to_vector([[0.1, 0.2]]) == [0.1, 0.2]


def test_to_vector_accepts_array_like() -> None:
    array = MagicMock()
    array.tolist.return_value = [0.25, 0.75]
    assert to_vector(array) == [0.25, 0.75]


@pytest.mark.parametrize(
    "raw",
    [
        [],
        None,
        "0.1,0.2",
        [[0.1], [0.2]],
        [0.1, "x"],
        [True, False],
    ],
)
def test_to_vector_rejects_malformed(raw: object) -> None:
    with pytest.raises(EmbeddingError):
        to_vector(raw)


def test_get_embedding_client_uses_inference_endpoint() -> None:
    config = Settings(_env_file=None, hf_token="hf_abc", embedding_model="intfloat/multilingual-e5-base")
    with patch("langchain_huggingface.HuggingFaceEndpointEmbeddings") as endpoint_cls:
        client = get_embedding_client(config)

    endpoint_cls.assert_called_once_with(
        model="intfloat/multilingual-e5-base",
        task="feature-extraction",
        huggingfacehub_api_token="hf_abc",
    )
    assert client.model == "intfloat/multilingual-e5-base"


def test_get_embedding_client_local() -> None:
    config = Settings(_env_file=None, embedding_provider="local", embedding_model="m")
    with patch("langchain_huggingface.HuggingFaceEmbeddings") as local_cls:
        get_embedding_client(config)

    local_cls.assert_called_once_with(model_name="m")
