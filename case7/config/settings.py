"""Configuration management for the case7 search service."""

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.domain.exceptions import MissingAPIKeyError


def _sanitize_secret(value: str) -> str:
    """Remove BOM characters and whitespace from secrets.

    Secrets pasted into ``.env`` files or injected by a secret manager may
    carry a BOM that breaks HTTP headers.
    """
    if not value:
        return value
    return value.lstrip("\ufeff").strip()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Google AI API (embeddings)
    google_api_key: str = ""
    embedding_model: str = "gemini-embedding-001"
    embedding_dimension: int = 3072
    embedding_requests_per_minute: int | None = 60

    # Qdrant settings
    qdrant_url: str = ""
    qdrant_api_key: str = ""
    qdrant_collection: str = "cases"

    @field_validator("google_api_key", "qdrant_api_key", "qdrant_url", mode="after")
    @classmethod
    def sanitize_secrets(cls, value: str) -> str:
        """Remove BOM and whitespace from secret values."""
        return _sanitize_secret(value)

    # Case corpus
    cases_dir: Path = Path("./cases")

    # Indexing
    index_batch_size: int = 10
    index_batch_pause: float = 1.0

    # Search
    default_search_limit: int = 5

    # Server
    host: str = "127.0.0.1"
    port: int = 3000
    debug: bool = False

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    def require_index_credentials(self) -> None:
        """Fail fast when the embedding or vector index credentials are missing.

        Raises:
            MissingAPIKeyError: If any of the Gemini or Qdrant settings is empty.
        """
        missing = [
            name
            for name, value in (
                ("GOOGLE_API_KEY", self.google_api_key),
                ("QDRANT_URL", self.qdrant_url),
                ("QDRANT_API_KEY", self.qdrant_api_key),
            )
            if not value
        ]
        if missing:
            raise MissingAPIKeyError(
                f"{', '.join(missing)} must be set to use the vector index",
                context={"missing": missing},
            )


# Global settings instance
settings = Settings()
