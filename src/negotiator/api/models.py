"""Pydantic models for the HTTP API."""

from pydantic import BaseModel, Field

from negotiator.core.catalog import CarrierEntry
from negotiator.core.service.models import ChatTurn


class CarrierListResponse(BaseModel):
    """Response model for the carrier catalog endpoint."""

    carriers: list[CarrierEntry] = Field(description="Selectable carrier datasets")


class NegotiationChatRequest(BaseModel):
    """Request model for the negotiation chat endpoint.

    Fields are optional at the schema level; presence is checked by the
    service so that every missing field yields the same 400 response.
    """

    carrier_url: str | None = Field(
        default=None, description="Carrier identifier from the catalog"
    )
    chat_history: list[ChatTurn] | None = Field(
        default=None, description="Prior turns, oldest first (may be empty)"
    )
    message: str | None = Field(default=None, description="New user message")


class NegotiationChatResponse(BaseModel):
    """Response model for the negotiation chat endpoint."""

    response: str = Field(description="Assistant reply text")


class HealthResponse(BaseModel):
    status: str = "ok"
