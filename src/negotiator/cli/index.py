"""``negotiator-index``: build a carrier store from text documents."""

import argparse
import logging
import sys
from pathlib import Path

from negotiator.configs.config import get_app_config
from negotiator.core.catalog import build_store, load_documents
from negotiator.core.catalog.builder import DEFAULT_CHUNK_CHARS
from negotiator.core.llm import get_embeddings
from negotiator.infra.logging import setup_logging

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Build the persisted store for one carrier",
    )
    parser.add_argument(
        "carrier",
        help="Carrier identifier, used as the store directory name (e.g. ups.com)",
    )
    parser.add_argument(
        "sources",
        nargs="+",
        type=Path,
        help="Text/markdown files or directories to index",
    )
    parser.add_argument(
        "--base-dir",
        type=Path,
        default=None,
        help="Catalog directory (default: catalog.base_dir from config)",
    )
    parser.add_argument(
        "--chunk-chars",
        type=int,
        default=DEFAULT_CHUNK_CHARS,
        help=f"Maximum characters per fragment (default: {DEFAULT_CHUNK_CHARS})",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    config = get_app_config()
    setup_logging(config.logging)

    base_dir = args.base_dir or config.catalog.base_dir
    documents = load_documents(args.sources, max_chars=args.chunk_chars)
    if not documents:
        logger.error(
            "No .txt or .md content found in %s",
            [str(s) for s in args.sources],
        )
        return 1

    build_store(
        documents,
        get_embeddings(config.embedding),
        base_dir / args.carrier,
        store_file=config.catalog.store_file,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
