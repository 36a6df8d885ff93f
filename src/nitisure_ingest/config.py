"""Shared configuration loaded from environment / .env file."""

from __future__ import annotations

from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings

from nitisure_ingest.errors import MissingCredentialsError


class Settings(BaseSettings):
    """Run-wide settings, populated from env vars or .env file."""

    # Embedding
    hf_token: SecretStr = Field(default=SecretStr(""), description="Hugging Face Inference API token")
    embedding_model: str = "intfloat/multilingual-e5-base"
    embedding_provider: Literal["hf-endpoint", "local"] = Field(
        default="hf-endpoint",
        description=(
            "'hf-endpoint' calls the hosted Inference API with HF_TOKEN; "
            "'local' runs the sentence-transformer in-process."
        ),
    )

    # Vector index
    vector_backend: Literal["qdrant", "chroma"] = "qdrant"
    qdrant_url: str = ""
    qdrant_key: SecretStr = Field(default=SecretStr(""))
    qdrant_collection: str = Field(default="nitisure_laws", description="Target collection name")
    chroma_host: str = "localhost"
    chroma_port: int = 8000
    vector_size: int = Field(default=768, gt=0)
    distance_metric: Literal["cosine", "euclid", "dot"] = "cosine"
    validate_existing_collection: bool = True

    # Ingestion run
    source_path: str = "data/laws.csv"
    request_delay: float = Field(default=0.3, ge=0.0, description="Seconds to wait between records")
    pacing: Literal["fixed", "adaptive"] = "fixed"
    identity_strategy: Literal["stable", "random"] = "stable"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    def missing_credentials(self) -> list[str]:
        """Return env var names required by the selected backends but left empty."""
        missing: list[str] = []
        if self.embedding_provider == "hf-endpoint" and not self.hf_token.get_secret_value():
            missing.append("HF_TOKEN")
        if self.vector_backend == "qdrant":
            if not self.qdrant_url:
                missing.append("QDRANT_URL")
            if not self.qdrant_key.get_secret_value():
                missing.append("QDRANT_KEY")
        return missing

    def require_credentials(self) -> None:
        """Raise :class:`MissingCredentialsError` unless every required value is set."""
        missing = self.missing_credentials()
        if missing:
            raise MissingCredentialsError(missing)
