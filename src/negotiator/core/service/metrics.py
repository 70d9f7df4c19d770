"""Prometheus metrics for the negotiator service.

Custom business metrics that complement the auto-instrumented HTTP
metrics provided by ``prometheus-fastapi-instrumentator``.

All metrics use the ``negotiator_`` prefix.
"""

import asyncio
import functools
import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from fastapi import FastAPI
from prometheus_client import Counter, Gauge, Histogram
from prometheus_fastapi_instrumentator import Instrumentator

from negotiator.configs.system import MetricsConfig

from .models import (
    OUTCOME_CANCELLED,
    OUTCOME_ERROR,
    OUTCOME_INVALID,
    OUTCOME_NOT_FOUND,
    OUTCOME_OK,
    CarrierNotFound,
    InvalidRequest,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# ---------------------------------------------------------------------------
# Chat request metrics
# ---------------------------------------------------------------------------

NEGOTIATIONS_IN_PROGRESS = Gauge(
    "negotiator_chat_requests_in_progress",
    "Number of negotiation chat requests currently being answered",
)

NEGOTIATIONS_TOTAL = Counter(
    "negotiator_chat_requests_total",
    "Total negotiation chat requests by outcome",
    ["outcome"],  # OUTCOME_* in models/constants.py
)

NEGOTIATION_DURATION_SECONDS = Histogram(
    "negotiator_chat_request_duration_seconds",
    "End-to-end duration of a negotiation chat request",
    buckets=(0.5, 1, 2, 5, 10, 30, 60, 120, 300),
)

# ---------------------------------------------------------------------------
# Pipeline stage metrics
# ---------------------------------------------------------------------------

STORE_LOAD_LATENCY_SECONDS = Histogram(
    "negotiator_store_load_latency_seconds",
    "Time to load a persisted carrier store from disk",
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1, 2, 5),
)

RAG_FRAGMENTS_RETURNED = Histogram(
    "negotiator_rag_fragments_returned",
    "Number of fragments returned per retrieval",
    buckets=(0, 1, 2, 3, 5, 10),
)

LLM_LATENCY_SECONDS = Histogram(
    "negotiator_llm_latency_seconds",
    "Latency of hosted chat model calls",
    buckets=(0.5, 1, 2, 5, 10, 30, 60, 120),
)


# ---------------------------------------------------------------------------
# Decorator
# ---------------------------------------------------------------------------


def observe_negotiation(
    fn: Callable[..., Awaitable[T]],
) -> Callable[..., Awaitable[T]]:
    """Record in-progress, outcome and duration metrics around *fn*."""

    @functools.wraps(fn)
    async def wrapper(*args: Any, **kwargs: Any) -> T:
        NEGOTIATIONS_IN_PROGRESS.inc()
        start = time.monotonic()
        outcome = OUTCOME_OK
        try:
            return await fn(*args, **kwargs)
        except InvalidRequest:
            outcome = OUTCOME_INVALID
            raise
        except CarrierNotFound:
            outcome = OUTCOME_NOT_FOUND
            raise
        except asyncio.CancelledError:
            outcome = OUTCOME_CANCELLED
            raise
        except Exception:
            outcome = OUTCOME_ERROR
            raise
        finally:
            NEGOTIATIONS_IN_PROGRESS.dec()
            NEGOTIATIONS_TOTAL.labels(outcome=outcome).inc()
            NEGOTIATION_DURATION_SECONDS.observe(time.monotonic() - start)

    return wrapper


# ---------------------------------------------------------------------------
# HTTP instrumentation
# ---------------------------------------------------------------------------


def setup_metrics(app: FastAPI, config: MetricsConfig) -> None:
    """Attach HTTP instrumentation and the ``/metrics`` endpoint to *app*."""
    if not config.enabled:
        logger.info("Prometheus metrics disabled")
        return

    Instrumentator(
        excluded_handlers=config.excluded_handlers,
    ).instrument(app).expose(app, endpoint="/metrics")

    logger.info("Prometheus metrics initialised")
