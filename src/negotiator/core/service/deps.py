"""FastAPI dependency factory for the negotiation service.

``get_negotiation_service`` is a per-request ``Depends`` factory with an
explicit parameter chain; tests override ``get_catalog`` or the service
itself via ``app.dependency_overrides``.
"""

from functools import partial
from typing import Annotated

from fastapi import Depends

from negotiator.configs.config import get_llm_config, get_rag_config
from negotiator.configs.system import LLMConfig, RagConfig
from negotiator.core.catalog import CatalogProvider
from negotiator.core.catalog.deps import get_catalog
from negotiator.core.llm import get_llm

from .negotiation import NegotiationService


def get_negotiation_service(
    catalog: Annotated[CatalogProvider, Depends(get_catalog)],
    llm_config: Annotated[LLMConfig, Depends(get_llm_config)],
    rag_config: Annotated[RagConfig, Depends(get_rag_config)],
) -> NegotiationService:
    """Create a negotiation service per request."""
    return NegotiationService(
        catalog=catalog,
        llm_factory=partial(get_llm, llm_config),
        rag_config=rag_config,
    )
