"""FastAPI dependency factory for the carrier catalog."""

from functools import partial
from typing import Annotated

from fastapi import Depends

from negotiator.configs.config import get_catalog_config, get_embedding_config
from negotiator.configs.system import CatalogConfig, EmbeddingConfig
from negotiator.core.llm import get_embeddings

from .base import CatalogProvider
from .filesystem import FilesystemCatalog


def get_catalog(
    config: Annotated[CatalogConfig, Depends(get_catalog_config)],
    embedding_config: Annotated[EmbeddingConfig, Depends(get_embedding_config)],
) -> CatalogProvider:
    """Create the filesystem catalog.

    The embedding client is only built when a store is actually loaded,
    so listing carriers works without model credentials.
    """
    return FilesystemCatalog(
        base_dir=config.base_dir,
        embeddings_factory=partial(get_embeddings, embedding_config),
        store_file=config.store_file,
    )
