from datetime import timedelta
from pathlib import Path

from pydantic import BaseModel, Field, SecretStr


class APIConfig(BaseModel):
    """API configuration settings."""

    host: str = Field(default="0.0.0.0", description="API server host")
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed to make cross-origin requests",
    )


class CatalogConfig(BaseModel):
    """Where the persisted carrier stores live."""

    base_dir: Path = Field(
        default=Path("negotiation-data"),
        description="Directory holding one persisted store per carrier",
    )
    store_file: str = Field(
        default="vector_store.json",
        description="Serialized vector store file name inside a carrier directory",
    )


class LLMConfig(BaseModel):
    """Hosted chat-completion model settings.

    ``api_key`` falls back to the ``OPENAI_API_KEY`` environment variable
    when unset.
    """

    endpoint: str | None = Field(
        default=None, description="OpenAI-compatible base URL (None = OpenAI)"
    )
    api_key: SecretStr | None = Field(default=None, description="API key")
    model_name: str = Field(default="gpt-4o-mini", description="Chat model name")
    temperature: float | None = Field(
        default=None, description="Sampling temperature (None = model default)"
    )
    max_tokens: int | None = Field(
        default=None, description="Maximum tokens in a single response"
    )
    timeout: timedelta | None = Field(
        default=None, description="Per-call timeout (None = client default)"
    )
    max_retries: int = Field(default=0, description="Client-side retries")


class EmbeddingConfig(BaseModel):
    """Embedding model used to query the persisted stores.

    Must match the model the stores were built with.
    """

    endpoint: str | None = Field(default=None, description="OpenAI-compatible base URL")
    api_key: SecretStr | None = Field(default=None, description="API key")
    model_name: str = Field(
        default="text-embedding-ada-002", description="Embedding model name"
    )


class RagConfig(BaseModel):
    """Retrieval settings."""

    top_k: int = Field(
        default=2, ge=1, description="Number of fragments retrieved per query"
    )


class LoggingConfig(BaseModel):
    """Root logger settings."""

    level: str = Field(default="INFO", description="Root log level")
    json_output: bool = Field(
        default=True, description="Emit JSON lines instead of coloured text"
    )


class MetricsConfig(BaseModel):
    """Prometheus instrumentation settings."""

    enabled: bool = Field(default=True, description="Expose /metrics")
    excluded_handlers: list[str] = Field(
        default_factory=lambda: ["/metrics", "/health"],
        description="Paths not recorded by the HTTP instrumentation",
    )
