"""Context chat engine -- LangGraph StateGraph over a retriever.

Pipeline nodes:
    retrieve → build_prompt → generate → END

The engine is built per request around the retriever of one carrier
store. The caller supplies the conversation so far (leading system turn
first) and the new message; retrieved fragments are appended to the
leading system turn, so the model sees::

    [system + context, *history, user message]
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from typing import Any, TypedDict

from langchain_core.documents import Document
from langchain_core.language_models import BaseLanguageModel
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from langchain_core.retrievers import BaseRetriever
from langgraph.graph import END, START, StateGraph

from negotiator.infra.telemetry import (
    ATTR_RAG_RESULT_COUNT,
    SPAN_LLM_GENERATE,
    SPAN_RAG_RETRIEVE,
    tracer,
)

from .metrics import LLM_LATENCY_SECONDS, RAG_FRAGMENTS_RETURNED
from .prompt import render_context

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Node / state key constants
# ---------------------------------------------------------------------------

NODE_RETRIEVE = "retrieve"
NODE_BUILD_PROMPT = "build_prompt"
NODE_GENERATE = "generate"

KEY_QUERY = "query"
KEY_CONVERSATION = "conversation"
KEY_DOCUMENTS = "documents"
KEY_MESSAGES = "messages"
KEY_RESPONSE_TEXT = "response_text"


class EngineState(TypedDict, total=False):
    """Typed state threaded through every node of the graph."""

    query: str
    conversation: list[BaseMessage]

    documents: list[Document]
    messages: list[BaseMessage]

    response_text: str


def message_text(message: BaseMessage) -> str:
    """Plain text of a model reply, flattening content blocks."""
    content: Any = message.content
    if isinstance(content, str):
        return content
    parts: list[str] = []
    for block in content or []:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


class ContextChatEngine:
    """Retrieval-augmented chat over a single retriever.

    The graph is compiled once at construction; node functions are bound
    methods with access to the retriever and the model.
    """

    def __init__(self, retriever: BaseRetriever, llm: BaseLanguageModel) -> None:
        self._retriever = retriever
        self._llm = llm
        self._graph = self._build_graph()

    def _build_graph(self):
        builder: StateGraph = StateGraph(EngineState)

        builder.add_node(NODE_RETRIEVE, self._retrieve_node)
        builder.add_node(NODE_BUILD_PROMPT, self._build_prompt_node)
        builder.add_node(NODE_GENERATE, self._generate_node)

        builder.add_edge(START, NODE_RETRIEVE)
        builder.add_edge(NODE_RETRIEVE, NODE_BUILD_PROMPT)
        builder.add_edge(NODE_BUILD_PROMPT, NODE_GENERATE)
        builder.add_edge(NODE_GENERATE, END)

        return builder.compile()

    # ------------------------------------------------------------------
    # Node: retrieve
    # ------------------------------------------------------------------

    async def _retrieve_node(self, state: EngineState) -> dict:
        with tracer.start_as_current_span(SPAN_RAG_RETRIEVE) as span:
            documents = await self._retriever.ainvoke(state[KEY_QUERY])
            span.set_attribute(ATTR_RAG_RESULT_COUNT, len(documents))

        RAG_FRAGMENTS_RETURNED.observe(len(documents))
        logger.info("RAG: retrieved %d fragments", len(documents))
        return {KEY_DOCUMENTS: documents}

    # ------------------------------------------------------------------
    # Node: build_prompt
    # ------------------------------------------------------------------

    def _build_prompt_node(self, state: EngineState) -> dict:
        context = render_context(
            [doc.page_content for doc in state.get(KEY_DOCUMENTS, [])]
        )

        conversation = list(state.get(KEY_CONVERSATION, []))
        if conversation and isinstance(conversation[0], SystemMessage):
            head, rest = conversation[0], conversation[1:]
            system = SystemMessage(content=f"{message_text(head)}\n\n{context}")
        else:
            system, rest = SystemMessage(content=context), conversation

        messages: list[BaseMessage] = [
            system,
            *rest,
            HumanMessage(content=state[KEY_QUERY]),
        ]
        return {KEY_MESSAGES: messages}

    # ------------------------------------------------------------------
    # Node: generate
    # ------------------------------------------------------------------

    async def _generate_node(self, state: EngineState) -> dict:
        with tracer.start_as_current_span(SPAN_LLM_GENERATE):
            start = time.monotonic()
            response = await self._llm.ainvoke(state[KEY_MESSAGES])
            LLM_LATENCY_SECONDS.observe(time.monotonic() - start)

        if isinstance(response, BaseMessage):
            return {KEY_RESPONSE_TEXT: message_text(response)}
        return {KEY_RESPONSE_TEXT: str(response)}

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    async def chat(self, conversation: Sequence[BaseMessage], message: str) -> str:
        """Answer *message* given the *conversation* so far."""
        result = await self._graph.ainvoke(
            {KEY_QUERY: message, KEY_CONVERSATION: list(conversation)}
        )
        return result[KEY_RESPONSE_TEXT]
