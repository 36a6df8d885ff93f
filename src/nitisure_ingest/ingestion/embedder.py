"""Embedding client — one text in, one validated vector out."""

from __future__ import annotations

import logging
from numbers import Real
from typing import TYPE_CHECKING, Any, Protocol

from nitisure_ingest.errors import EmbeddingError

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings

    from nitisure_ingest.config import Settings

logger = logging.getLogger(__name__)


class EmbeddingClient(Protocol):
    model: str

    def embed(self, text: str) -> list[float]: ...


class LangChainEmbeddingClient:
    """Adapter from a LangChain ``Embeddings`` object to :class:`EmbeddingClient`.

    Parameters
    ----------
    embeddings:
        Any LangChain embeddings implementation.
    model:
        Model identifier, used in log lines.
    """

    def __init__(self, embeddings: Embeddings, model: str) -> None:
        self._embeddings = embeddings
        self.model = model

    def embed(self, text: str) -> list[float]:
        """Embed *text*.

        Raises
        ------
        EmbeddingError
            If the underlying call fails or returns something other than
            a flat list of numbers.
        """
        try:
            raw = self._embeddings.embed_query(text)
        except Exception as exc:
            raise EmbeddingError(f"Embedding request to {self.model} failed: {exc}") from exc
        return to_vector(raw)


def to_vector(raw: Any) -> list[float]:
    """Validate an embedding response and return it as ``list[float]``.

    Feature-extraction endpoints sometimes answer with a one-row matrix
    (``[[...]]``); that single row is unwrapped.
    """
    if hasattr(raw, "tolist"):
        raw = raw.tolist()
    if isinstance(raw, (list, tuple)) and len(raw) == 1 and isinstance(raw[0], (list, tuple)):
        raw = raw[0]
    if not isinstance(raw, (list, tuple)) or not raw:
        raise EmbeddingError(f"Embedding response is not a non-empty vector: {type(raw).__name__}")
    if not all(isinstance(x, Real) and not isinstance(x, bool) for x in raw):
        raise EmbeddingError("Embedding vector must contain only numbers")
    return [float(x) for x in raw]


def get_embedding_client(config: Settings) -> LangChainEmbeddingClient:
    """Return the embedding client selected by ``config.embedding_provider``."""
    if config.embedding_provider == "hf-endpoint":
        from langchain_huggingface import HuggingFaceEndpointEmbeddings

        embeddings = HuggingFaceEndpointEmbeddings(
            model=config.embedding_model,
            task="feature-extraction",
            huggingfacehub_api_token=config.hf_token.get_secret_value(),
        )
    elif config.embedding_provider == "local":
        from langchain_huggingface import HuggingFaceEmbeddings

        embeddings = HuggingFaceEmbeddings(model_name=config.embedding_model)
    else:
        raise ValueError(f"Unsupported embedding_provider={config.embedding_provider!r}")

    logger.info("Using %s embeddings: %s", config.embedding_provider, config.embedding_model)
    return LangChainEmbeddingClient(embeddings, config.embedding_model)
