"""Chat model and embedding client factories."""

import logging
from typing import Annotated, Any

from fastapi import Depends
from langchain_core.embeddings import Embeddings
from langchain_core.language_models import BaseChatModel
from langchain_openai import ChatOpenAI, OpenAIEmbeddings

from negotiator.configs.config import get_embedding_config, get_llm_config
from negotiator.configs.system import EmbeddingConfig, LLMConfig

logger = logging.getLogger(__name__)


def _client_kwargs(endpoint: str | None, api_key: Any) -> dict[str, Any]:
    # Unset values are left out so the OpenAI client falls back to
    # OPENAI_API_KEY / OPENAI_BASE_URL.
    kwargs: dict[str, Any] = {}
    if endpoint:
        kwargs["base_url"] = endpoint
    if api_key is not None:
        kwargs["api_key"] = api_key
    return kwargs


def get_llm(
    config: Annotated[LLMConfig, Depends(get_llm_config)],
) -> BaseChatModel:
    """Create the hosted chat model client."""
    kwargs = _client_kwargs(config.endpoint, config.api_key)
    if config.temperature is not None:
        kwargs["temperature"] = config.temperature
    if config.max_tokens is not None:
        kwargs["max_tokens"] = config.max_tokens
    if config.timeout is not None:
        kwargs["timeout"] = config.timeout.total_seconds()

    logger.debug("Creating chat model client for %s", config.model_name)
    return ChatOpenAI(
        model=config.model_name,
        max_retries=config.max_retries,
        **kwargs,
    )


def get_embeddings(
    config: Annotated[EmbeddingConfig, Depends(get_embedding_config)],
) -> Embeddings:
    """Create the embedding client used to query persisted stores."""
    return OpenAIEmbeddings(
        model=config.model_name,
        **_client_kwargs(config.endpoint, config.api_key),
    )
