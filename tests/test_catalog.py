"""Unit tests for the filesystem carrier catalog and store builder."""

import os
from pathlib import Path

import pytest
from langchain_core.vectorstores import InMemoryVectorStore

from negotiator.core.catalog import (
    DEFAULT_STORE_FILE,
    CarrierEntry,
    FilesystemCatalog,
    build_store,
    carrier_label,
    load_documents,
)
from negotiator.core.catalog.builder import split_paragraphs

# ---------------------------------------------------------------------------
# Labels
# ---------------------------------------------------------------------------


class TestCarrierLabel:
    @pytest.mark.parametrize(
        ("identifier", "label"),
        [
            ("ups.com", "Ups"),
            ("fedex.com", "Fedex"),
            ("dhl", "Dhl"),
            ("fedEx.co.uk", "FedEx"),
            ("usps.gov", "Usps"),
            (".hidden", ""),
            ("", ""),
        ],
    )
    def test_prefix_before_first_dot_capitalised(self, identifier, label):
        assert carrier_label(identifier) == label

    def test_rest_of_prefix_untouched(self):
        # str.capitalize() would lower-case "PS"
        assert carrier_label("uPS.com") == "UPS"


# ---------------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------------


class TestListEntries:
    def test_one_entry_per_child(self, catalog: FilesystemCatalog, catalog_dir: Path):
        entries = catalog.list_entries()
        assert len(entries) == len(os.listdir(catalog_dir))
        assert {e.value for e in entries} == {"ups.com", "fedex.com"}

    def test_labels_derived_from_values(self, catalog: FilesystemCatalog):
        for entry in catalog.list_entries():
            assert entry.label == carrier_label(entry.value)

    def test_idempotent_as_sets(self, catalog: FilesystemCatalog):
        first = {(e.label, e.value) for e in catalog.list_entries()}
        second = {(e.label, e.value) for e in catalog.list_entries()}
        assert first == second

    def test_reflects_directory_changes(
        self, catalog: FilesystemCatalog, catalog_dir: Path
    ):
        (catalog_dir / "dhl.de").mkdir()
        assert CarrierEntry(label="Dhl", value="dhl.de") in catalog.list_entries()

    def test_plain_files_are_listed_too(
        self, catalog: FilesystemCatalog, catalog_dir: Path
    ):
        (catalog_dir / "notes.txt").write_text("x")
        assert "notes.txt" in {e.value for e in catalog.list_entries()}

    def test_missing_base_dir_raises(self, tmp_path: Path, embeddings):
        catalog = FilesystemCatalog(tmp_path / "absent", lambda: embeddings)
        with pytest.raises(FileNotFoundError):
            catalog.list_entries()

    def test_empty_dir(self, tmp_path: Path, embeddings):
        catalog = FilesystemCatalog(tmp_path, lambda: embeddings)
        assert catalog.list_entries() == []


# ---------------------------------------------------------------------------
# Resolving stores
# ---------------------------------------------------------------------------


class TestResolve:
    @pytest.mark.asyncio
    async def test_present_carrier_returns_usable_store(
        self, catalog: FilesystemCatalog
    ):
        store = await catalog.resolve("ups.com")
        assert isinstance(store, InMemoryVectorStore)

        docs = await store.as_retriever(search_kwargs={"k": 2}).ainvoke("discounts")
        assert len(docs) == 2
        assert all("UPS" in d.page_content for d in docs)

    @pytest.mark.asyncio
    async def test_stores_are_carrier_scoped(self, catalog: FilesystemCatalog):
        store = await catalog.resolve("fedex.com")
        docs = store.similarity_search("discounts", k=5)
        assert [d.metadata["source"] for d in docs] == ["fedex-earned.md"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "identifier",
        ["dhl.de", "UPS.COM", "ups", "ups.com/", "../negotiation-data/ups.com", ""],
    )
    async def test_absent_carrier_returns_none(
        self, catalog: FilesystemCatalog, identifier: str
    ):
        assert await catalog.resolve(identifier) is None

    @pytest.mark.asyncio
    async def test_not_cached_between_calls(self, catalog: FilesystemCatalog):
        first = await catalog.resolve("ups.com")
        second = await catalog.resolve("ups.com")
        assert first is not second

    @pytest.mark.asyncio
    async def test_matching_child_without_store_propagates(
        self, catalog: FilesystemCatalog, catalog_dir: Path
    ):
        (catalog_dir / "broken.com").mkdir()
        with pytest.raises(FileNotFoundError):
            await catalog.resolve("broken.com")

    @pytest.mark.asyncio
    async def test_embeddings_built_only_on_load(self, catalog_dir: Path, embeddings):
        calls = []

        def factory():
            calls.append(1)
            return embeddings

        catalog = FilesystemCatalog(catalog_dir, factory)
        catalog.list_entries()
        assert await catalog.resolve("missing") is None
        assert calls == []

        await catalog.resolve("ups.com")
        assert calls == [1]


# ---------------------------------------------------------------------------
# Building stores
# ---------------------------------------------------------------------------


class TestBuilder:
    def test_build_store_writes_store_file(self, tmp_path: Path, embeddings):
        from langchain_core.documents import Document

        build_store([Document(page_content="hello")], embeddings, tmp_path / "x.com")
        assert (tmp_path / "x.com" / DEFAULT_STORE_FILE).is_file()

    def test_build_store_without_documents(self, tmp_path: Path, embeddings):
        store = build_store([], embeddings, tmp_path / "empty.com")
        assert store.store == {}
        assert (tmp_path / "empty.com" / DEFAULT_STORE_FILE).is_file()

    def test_split_paragraphs_groups_up_to_limit(self):
        text = "aaaa\n\nbbbb\n\ncccc"
        assert split_paragraphs(text, max_chars=8) == ["aaaa\n\nbbbb", "cccc"]

    def test_split_paragraphs_keeps_oversized_paragraph(self):
        assert split_paragraphs("x" * 20, max_chars=5) == ["x" * 20]

    def test_split_paragraphs_skips_blank(self):
        assert split_paragraphs("\n\n\n\n") == []

    def test_load_documents_walks_directories(self, tmp_path: Path):
        docs_dir = tmp_path / "docs"
        (docs_dir / "sub").mkdir(parents=True)
        (docs_dir / "a.md").write_text("Rates.\n\nSurcharges.", encoding="utf-8")
        (docs_dir / "sub" / "b.txt").write_text("Accessorials.", encoding="utf-8")
        (docs_dir / "c.pdf").write_bytes(b"%PDF")

        docs = load_documents([docs_dir], max_chars=8)

        assert [(d.metadata["source"], d.page_content) for d in docs] == [
            ("a.md", "Rates."),
            ("a.md", "Surcharges."),
            ("b.txt", "Accessorials."),
        ]
