"""Centralized FastAPI dependency type aliases.

Import these ``*Dep`` aliases in route modules instead of manually
writing ``Annotated[T, Depends(get_xxx)]`` everywhere.  Each alias
corresponds to a single ``get_*`` factory and can be overridden in
tests via ``app.dependency_overrides[get_xxx] = ...``.
"""

from typing import Annotated

from fastapi import Depends

from negotiator.core.catalog import CatalogProvider
from negotiator.core.catalog.deps import get_catalog
from negotiator.core.service.deps import get_negotiation_service
from negotiator.core.service.negotiation import NegotiationService

CatalogDep = Annotated[CatalogProvider, Depends(get_catalog)]
NegotiationServiceDep = Annotated[
    NegotiationService, Depends(get_negotiation_service)
]
