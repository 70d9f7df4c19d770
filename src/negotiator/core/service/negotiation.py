"""Negotiation chat handler.

Validates a chat request, opens the carrier's persisted store, and runs
one retrieval-augmented turn with the carrier-specific system prompt.
Each call is self-contained: nothing is cached between requests and
no conversation state is kept server side.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Protocol

from langchain_core.language_models import BaseLanguageModel
from langchain_core.messages import BaseMessage, SystemMessage
from langchain_core.retrievers import BaseRetriever

from negotiator.configs.system import RagConfig
from negotiator.core.catalog import CatalogProvider
from negotiator.infra.telemetry import (
    ATTR_CARRIER,
    ATTR_HISTORY_LENGTH,
    ATTR_RAG_TOP_K,
    SPAN_CHAT_PIPELINE,
    tracer,
)

from .engine import ContextChatEngine
from .metrics import observe_negotiation
from .models import CarrierNotFound, ChatTurn, InvalidRequest, turns_to_messages
from .prompt import render_system_instruction

logger = logging.getLogger(__name__)


class ChatEngine(Protocol):
    async def chat(self, conversation: Sequence[BaseMessage], message: str) -> str: ...


ChatEngineFactory = Callable[[BaseRetriever, BaseLanguageModel], ChatEngine]


class NegotiationService:
    """Rates-negotiation chat over a carrier catalog.

    The model client is created lazily through *llm_factory* so that
    invalid requests and unknown carriers are rejected before any
    upstream client is built.
    """

    def __init__(
        self,
        catalog: CatalogProvider,
        llm_factory: Callable[[], BaseLanguageModel],
        rag_config: RagConfig,
        engine_factory: ChatEngineFactory = ContextChatEngine,
    ) -> None:
        self._catalog = catalog
        self._llm_factory = llm_factory
        self._rag_config = rag_config
        self._engine_factory = engine_factory

    @staticmethod
    def build_conversation(
        carrier: str, chat_history: Sequence[ChatTurn]
    ) -> list[BaseMessage]:
        """System instruction for *carrier* followed by the caller's history."""
        return [
            SystemMessage(content=render_system_instruction(carrier)),
            *turns_to_messages(list(chat_history)),
        ]

    @observe_negotiation
    async def negotiate(
        self,
        carrier: str | None,
        chat_history: Sequence[ChatTurn] | None,
        message: str | None,
    ) -> str:
        """Answer *message* for *carrier* given the caller's *chat_history*.

        Raises:
            InvalidRequest: a field is missing (an empty history is fine).
            CarrierNotFound: no store exists for *carrier*.

        Store, retriever and model failures propagate unchanged.
        """
        if not carrier or chat_history is None or not message:
            raise InvalidRequest()

        with tracer.start_as_current_span(SPAN_CHAT_PIPELINE) as span:
            span.set_attribute(ATTR_CARRIER, carrier)
            span.set_attribute(ATTR_HISTORY_LENGTH, len(chat_history))
            span.set_attribute(ATTR_RAG_TOP_K, self._rag_config.top_k)

            store = await self._catalog.resolve(carrier)
            if store is None:
                raise CarrierNotFound(carrier)

            retriever = store.as_retriever(
                search_kwargs={"k": self._rag_config.top_k}
            )
            conversation = self.build_conversation(carrier, chat_history)
            logger.info(
                "Negotiation chat for %s: %d history turns",
                carrier,
                len(chat_history),
                extra={"conversation": [m.model_dump() for m in conversation]},
            )

            engine = self._engine_factory(retriever, self._llm_factory())
            return await engine.chat(conversation, message)
