"""Shared fixtures for inventory tests."""

import io
from pathlib import Path

import pytest
from fastapi import UploadFile

from inventory.crud.crud_item import CRUDItem
from inventory.crud.crud_item_json import JsonItemStore
from inventory.db.session import build_engine
from inventory.services.blob_store import BlobStore
from inventory.services.inventory import InventoryService

# Smallest byte sequence that starts and ends like a JPEG
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00\xff\xd9"


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def jpeg_bytes() -> bytes:
    return JPEG_BYTES


@pytest.fixture
def make_upload():
    """Build an in-memory upload like the ones FastAPI hands to routes."""

    def _make(data: bytes = JPEG_BYTES, filename: str = "photo.jpg") -> UploadFile:
        return UploadFile(file=io.BytesIO(data), filename=filename)

    return _make


def build_store(backend: str, root: Path):
    if backend == "json":
        return JsonItemStore(root / "inventory.json")
    return CRUDItem(build_engine(f"sqlite+aiosqlite:///{(root / 'inventory.db').as_posix()}"))


@pytest.fixture(params=["json", "sql"])
async def repository(request, tmp_path: Path):
    """Opened item store, once per backend."""
    repo = build_store(request.param, tmp_path)
    await repo.open()
    yield repo
    await repo.close()


@pytest.fixture
async def blobs(tmp_path: Path) -> BlobStore:
    store = BlobStore(tmp_path / "uploads")
    await store.ensure_dir()
    return store


@pytest.fixture
def service(repository, blobs: BlobStore) -> InventoryService:
    return InventoryService(repository, blobs)


@pytest.fixture
def photo_url():
    return lambda item_id: f"http://inventory.test/inventory/{item_id}/photo"
