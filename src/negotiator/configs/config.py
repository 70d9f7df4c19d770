"""Configuration management using pydantic-settings.

**Not a singleton**: each call to ``get_app_config()`` re-reads config
from disk and the environment.

Priority order (highest first):

1. Init kwargs
2. Environment variables (``NEGOTIATOR_`` prefix, ``__`` for nesting)
3. ``.env`` dotenv file
4. Static YAML (``configs/config.yaml``)
5. Field defaults
6. File secrets

The listening port and the OpenAI key are the exceptions to the prefix
rule: they are read from the bare ``PORT`` and ``OPENAI_API_KEY``
variables.
"""

from pathlib import Path

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from .system import (
    APIConfig,
    CatalogConfig,
    EmbeddingConfig,
    LLMConfig,
    LoggingConfig,
    MetricsConfig,
    RagConfig,
)

# ---------------------------------------------------------------------------
# Path constants
# ---------------------------------------------------------------------------

CONFIG_PY_PATH = Path(__file__).resolve()
PROJECT_ROOT = CONFIG_PY_PATH.parent.parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "configs"

STATIC_CONFIG_FILE = CONFIG_DIR / "config.yaml"

DOTENV_FILE_PATH = PROJECT_ROOT / ".env"
ENV_DELIMITER = "__"  # Nested environment variable delimiter
ENV_PREFIX = "NEGOTIATOR_"

DEFAULT_ENCODING = "utf-8"
DEFAULT_PORT = 8000


class AppConfig(BaseSettings):
    """Application configuration."""

    model_config = SettingsConfigDict(
        env_file=DOTENV_FILE_PATH,
        env_file_encoding=DEFAULT_ENCODING,
        env_nested_delimiter=ENV_DELIMITER,
        env_prefix=ENV_PREFIX,
        case_sensitive=False,
        extra="ignore",
        yaml_file=STATIC_CONFIG_FILE,
        yaml_file_encoding=DEFAULT_ENCODING,
    )

    # An explicit alias bypasses ``env_prefix``, so this reads ``PORT``.
    port: int = Field(
        default=DEFAULT_PORT,
        validation_alias="port",
        description="API server port",
    )

    # Bare ``OPENAI_API_KEY`` (environment or ``.env``), used by the model
    # clients when their own ``api_key`` is unset.
    openai_api_key: SecretStr | None = Field(
        default=None,
        validation_alias="openai_api_key",
        description="Fallback API key for the chat and embedding clients",
    )

    api: APIConfig = Field(
        default_factory=APIConfig,
        description="API configuration settings",
    )

    catalog: CatalogConfig = Field(
        default_factory=CatalogConfig,
        description="Carrier catalog location",
    )

    llm: LLMConfig = Field(
        default_factory=LLMConfig,
        description="Chat model client settings",
    )

    embedding: EmbeddingConfig = Field(
        default_factory=EmbeddingConfig,
        description="Embedding client settings",
    )

    rag: RagConfig = Field(
        default_factory=RagConfig,
        description="Retrieval settings",
    )

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging settings",
    )

    metrics: MetricsConfig = Field(
        default_factory=MetricsConfig,
        description="Prometheus metrics settings",
    )

    @model_validator(mode="after")
    def _apply_openai_api_key(self) -> "AppConfig":
        if self.openai_api_key is not None:
            if self.llm.api_key is None:
                self.llm.api_key = self.openai_api_key
            if self.embedding.api_key is None:
                self.embedding.api_key = self.openai_api_key
        return self

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


def get_app_config() -> AppConfig:
    """Get the application configuration (re-read on every call)."""
    return AppConfig()


def get_catalog_config() -> CatalogConfig:
    return get_app_config().catalog


def get_llm_config() -> LLMConfig:
    return get_app_config().llm


def get_embedding_config() -> EmbeddingConfig:
    return get_app_config().embedding


def get_rag_config() -> RagConfig:
    return get_app_config().rag
