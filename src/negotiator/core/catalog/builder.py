"""Offline construction of carrier stores.

The service itself never writes stores; this is what the
``negotiator-index`` command (and the test-suite) use to produce the
directory layout that ``FilesystemCatalog`` reads.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from langchain_core.documents import Document
from langchain_core.embeddings import Embeddings
from langchain_core.vectorstores import InMemoryVectorStore

from .filesystem import DEFAULT_STORE_FILE

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_CHARS = 1500
SUPPORTED_SUFFIXES = frozenset({".txt", ".md"})


def split_paragraphs(text: str, max_chars: int = DEFAULT_CHUNK_CHARS) -> list[str]:
    """Group blank-line separated paragraphs into chunks of at most
    ``max_chars`` characters. A single oversized paragraph is kept whole."""
    chunks: list[str] = []
    current: list[str] = []
    size = 0
    for paragraph in (p.strip() for p in text.split("\n\n")):
        if not paragraph:
            continue
        if current and size + len(paragraph) > max_chars:
            chunks.append("\n\n".join(current))
            current, size = [], 0
        current.append(paragraph)
        size += len(paragraph)
    if current:
        chunks.append("\n\n".join(current))
    return chunks


def load_documents(
    paths: Iterable[Path], max_chars: int = DEFAULT_CHUNK_CHARS
) -> list[Document]:
    """Read text/markdown files (directories are walked) into chunked documents."""
    documents: list[Document] = []
    for path in paths:
        files = sorted(path.rglob("*")) if path.is_dir() else [path]
        for file in files:
            if not file.is_file() or file.suffix.lower() not in SUPPORTED_SUFFIXES:
                continue
            text = file.read_text(encoding="utf-8")
            for i, chunk in enumerate(split_paragraphs(text, max_chars)):
                documents.append(
                    Document(
                        page_content=chunk,
                        metadata={"source": file.name, "part_index": i},
                    )
                )
    return documents


def build_store(
    documents: Iterable[Document],
    embeddings: Embeddings,
    persist_dir: Path,
    store_file: str = DEFAULT_STORE_FILE,
) -> InMemoryVectorStore:
    """Embed *documents* and persist them as a carrier store in *persist_dir*."""
    store = InMemoryVectorStore(embedding=embeddings)
    docs = list(documents)
    if docs:
        store.add_documents(docs)

    path = Path(persist_dir) / store_file
    store.dump(str(path))
    logger.info("Wrote %d fragments to %s", len(docs), path)
    return store
