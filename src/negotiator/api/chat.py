"""Rates negotiation chat endpoint."""

from fastapi import APIRouter

from .deps import NegotiationServiceDep
from .models import NegotiationChatRequest, NegotiationChatResponse

router = APIRouter(prefix="/api", tags=["chat"])


@router.post("/rates-negotiation-chat")
async def rates_negotiation_chat(
    chat_request: NegotiationChatRequest,
    service: NegotiationServiceDep,
) -> NegotiationChatResponse:
    """Answer one negotiation chat turn.

    The client owns the conversation: it sends the full prior history
    with every request and appends the reply itself.
    """
    reply = await service.negotiate(
        chat_request.carrier_url,
        chat_request.chat_history,
        chat_request.message,
    )
    return NegotiationChatResponse(response=reply)
