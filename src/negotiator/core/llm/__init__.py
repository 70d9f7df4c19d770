"""LLM and embedding clients as langchain objects."""

from .deps import get_embeddings, get_llm  # noqa: F401
