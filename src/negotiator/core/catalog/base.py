"""Carrier catalog: entries and the abstract provider interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from langchain_core.vectorstores import VectorStore
from pydantic import BaseModel, Field

LABEL_SEPARATOR = "."


class CarrierEntry(BaseModel):
    """A selectable carrier dataset."""

    label: str = Field(description="Display name")
    value: str = Field(description="Dataset identifier (store directory name)")


def carrier_label(identifier: str) -> str:
    """Display label for a dataset identifier.

    ``"ups.com"`` -> ``"Ups"``. Only the first character is upper-cased;
    the rest of the prefix is kept as is.
    """
    prefix = identifier.split(LABEL_SEPARATOR, 1)[0]
    return prefix[:1].upper() + prefix[1:]


class CatalogProvider(ABC):
    """Lists carrier datasets and opens their persisted stores.

    Implementations decide where stores live (filesystem, object store,
    database); the chat handler only talks to this interface.
    """

    @abstractmethod
    def list_entries(self) -> list[CarrierEntry]:
        """Return one entry per available dataset, in backend order."""

    @abstractmethod
    async def resolve(self, identifier: str) -> VectorStore | None:
        """Open the persisted store for *identifier*.

        Returns ``None`` when no dataset has exactly that identifier.
        Failures while opening an existing store propagate.
        """
