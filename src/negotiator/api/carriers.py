"""Carrier catalog endpoint."""

from fastapi import APIRouter

from .deps import CatalogDep
from .models import CarrierListResponse

router = APIRouter(prefix="/api", tags=["carriers"])


@router.get("/carriers")
def list_carriers(catalog: CatalogDep) -> CarrierListResponse:
    """List the carrier datasets available for negotiation chat.

    Entries come back in directory-listing order.
    """
    return CarrierListResponse(carriers=catalog.list_entries())
