"""OpenTelemetry tracer and span vocabulary.

Only the API package is used here; spans are no-ops unless the process
is started with an SDK configured (e.g. ``opentelemetry-instrument``).

Usage::

    from negotiator.infra.telemetry import SPAN_CHAT_PIPELINE, tracer

    with tracer.start_as_current_span(SPAN_CHAT_PIPELINE) as span:
        ...
"""

from opentelemetry import trace

tracer = trace.get_tracer("negotiator")

# ---------------------------------------------------------------------------
# Span names
# ---------------------------------------------------------------------------

SPAN_CHAT_PIPELINE = "chat.pipeline"
SPAN_STORE_LOAD = "catalog.store_load"
SPAN_RAG_RETRIEVE = "rag.retrieve"
SPAN_LLM_GENERATE = "llm.generate"

# ---------------------------------------------------------------------------
# Span attribute keys
# ---------------------------------------------------------------------------

ATTR_CARRIER = "negotiator.carrier"
ATTR_HISTORY_LENGTH = "negotiator.history_length"
ATTR_RAG_TOP_K = "rag.top_k"
ATTR_RAG_RESULT_COUNT = "rag.result_count"
