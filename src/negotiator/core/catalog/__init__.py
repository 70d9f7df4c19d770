"""Carrier catalog: listing datasets and opening their persisted stores."""

from .base import CarrierEntry, CatalogProvider, carrier_label  # noqa: F401
from .builder import build_store, load_documents  # noqa: F401
from .filesystem import DEFAULT_STORE_FILE, FilesystemCatalog  # noqa: F401
