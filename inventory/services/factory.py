from __future__ import annotations

from inventory.core.config import Settings
from inventory.crud.base import ItemRepository
from inventory.crud.crud_item import CRUDItem
from inventory.crud.crud_item_json import JsonItemStore
from inventory.db.session import build_engine
from inventory.services.blob_store import BlobStore
from inventory.services.inventory import InventoryService


def build_repository(settings: Settings) -> ItemRepository:
    """Pick the item store named by STORAGE_BACKEND."""
    backend = settings.STORAGE_BACKEND.lower()
    if backend == "json":
        return JsonItemStore(settings.inventory_file)
    if backend == "sql":
        return CRUDItem(build_engine(settings.sqlalchemy_database_uri))
    raise ValueError(f"Unknown STORAGE_BACKEND '{settings.STORAGE_BACKEND}'. Supported: json, sql")


async def open_inventory(settings: Settings) -> InventoryService:
    """Create the cache layout and return a ready service."""
    blobs = BlobStore(settings.uploads_dir)
    await blobs.ensure_dir()
    repository = build_repository(settings)
    await repository.open()
    return InventoryService(repository, blobs)
