"""Directory-backed carrier catalog.

Each immediate child of ``base_dir`` is one carrier dataset; the child's
name is the carrier identifier and the directory holds a serialized
``InMemoryVectorStore``.
"""

from __future__ import annotations

import asyncio
import logging
import os
import time
from collections.abc import Callable
from pathlib import Path

from langchain_core.embeddings import Embeddings
from langchain_core.vectorstores import InMemoryVectorStore

from negotiator.core.service.metrics import STORE_LOAD_LATENCY_SECONDS
from negotiator.infra.telemetry import ATTR_CARRIER, SPAN_STORE_LOAD, tracer

from .base import CarrierEntry, CatalogProvider, carrier_label

logger = logging.getLogger(__name__)

DEFAULT_STORE_FILE = "vector_store.json"


class FilesystemCatalog(CatalogProvider):
    """Catalog whose entries are the children of a directory.

    Nothing is cached: the directory is listed on every call and a store
    is loaded from disk on every ``resolve``.
    """

    def __init__(
        self,
        base_dir: Path,
        embeddings_factory: Callable[[], Embeddings],
        store_file: str = DEFAULT_STORE_FILE,
    ) -> None:
        self._base_dir = Path(base_dir)
        self._embeddings_factory = embeddings_factory
        self._store_file = store_file

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def _children(self) -> list[str]:
        # Listing order is whatever the OS returns; deliberately unsorted.
        return os.listdir(self._base_dir)

    def list_entries(self) -> list[CarrierEntry]:
        return [
            CarrierEntry(label=carrier_label(name), value=name)
            for name in self._children()
        ]

    def store_path(self, identifier: str) -> Path:
        return self._base_dir / identifier / self._store_file

    async def resolve(self, identifier: str) -> InMemoryVectorStore | None:
        # Exact match against the listing; the identifier is never joined
        # into a path unless it is one of the children.
        for name in self._children():
            if name == identifier:
                return await asyncio.to_thread(self._load, name)

        logger.info("No carrier store named %r under %s", identifier, self._base_dir)
        return None

    def _load(self, name: str) -> InMemoryVectorStore:
        path = self.store_path(name)
        with tracer.start_as_current_span(SPAN_STORE_LOAD) as span:
            span.set_attribute(ATTR_CARRIER, name)
            start = time.monotonic()
            store = InMemoryVectorStore.load(
                str(path), embedding=self._embeddings_factory()
            )
            STORE_LOAD_LATENCY_SECONDS.observe(time.monotonic() - start)

        logger.info("Loaded carrier store %s (%d fragments)", path, len(store.store))
        return store
