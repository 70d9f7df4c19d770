"""Shared fixtures: on-disk carrier stores, fake models, a test app."""

from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient
from langchain_core.documents import Document
from langchain_core.embeddings import DeterministicFakeEmbedding
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage
from langchain_core.outputs import ChatGeneration, ChatResult
from pydantic import Field

from negotiator.app import get_app
from negotiator.configs.config import AppConfig
from negotiator.configs.system import CatalogConfig, MetricsConfig, RagConfig
from negotiator.core.catalog import FilesystemCatalog, build_store
from negotiator.core.catalog.deps import get_catalog
from negotiator.core.service.deps import get_negotiation_service
from negotiator.core.service.negotiation import NegotiationService

UPS_DOCUMENTS = [
    Document(
        page_content="UPS offers tiered volume discounts on ground shipments.",
        metadata={"source": "ups-discounts.md"},
    ),
    Document(
        page_content="Fuel surcharges at UPS are adjusted weekly.",
        metadata={"source": "ups-surcharges.md"},
    ),
]

FEDEX_DOCUMENTS = [
    Document(
        page_content="FedEx earned discounts depend on rolling 52-week spend.",
        metadata={"source": "fedex-earned.md"},
    ),
]

DEFAULT_REPLY = "Ask for a tiered volume discount."


class RecordingChatModel(BaseChatModel):
    """Chat model that records every prompt and answers with ``reply``.

    Only ``_generate`` is implemented, so langchain never takes a
    streaming path around it.
    """

    reply: str = DEFAULT_REPLY
    received: list[list[BaseMessage]] = Field(default_factory=list)

    @property
    def _llm_type(self) -> str:
        return "recording"

    def _generate(
        self,
        messages: list[BaseMessage],
        stop: list[str] | None = None,
        run_manager: Any = None,
        **kwargs: Any,
    ) -> ChatResult:
        self.received.append(list(messages))
        message = AIMessage(content=self.reply)
        return ChatResult(generations=[ChatGeneration(message=message)])


@pytest.fixture()
def embeddings() -> DeterministicFakeEmbedding:
    return DeterministicFakeEmbedding(size=16)


@pytest.fixture()
def catalog_dir(tmp_path: Path, embeddings: DeterministicFakeEmbedding) -> Path:
    base = tmp_path / "negotiation-data"
    build_store(UPS_DOCUMENTS, embeddings, base / "ups.com")
    build_store(FEDEX_DOCUMENTS, embeddings, base / "fedex.com")
    return base


@pytest.fixture()
def catalog(
    catalog_dir: Path, embeddings: DeterministicFakeEmbedding
) -> FilesystemCatalog:
    return FilesystemCatalog(catalog_dir, lambda: embeddings)


@pytest.fixture()
def chat_model() -> RecordingChatModel:
    return RecordingChatModel()


@pytest.fixture()
def test_config(catalog_dir: Path) -> AppConfig:
    return AppConfig(
        catalog=CatalogConfig(base_dir=catalog_dir),
        metrics=MetricsConfig(enabled=False),
    )


@pytest.fixture()
def client(
    test_config: AppConfig,
    catalog: FilesystemCatalog,
    chat_model: RecordingChatModel,
) -> TestClient:
    app = get_app(test_config)
    app.dependency_overrides[get_catalog] = lambda: catalog
    app.dependency_overrides[get_negotiation_service] = lambda: NegotiationService(
        catalog=catalog,
        llm_factory=lambda: chat_model,
        rag_config=RagConfig(top_k=1),
    )
    return TestClient(app)
