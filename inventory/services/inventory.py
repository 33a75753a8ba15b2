"""Item lifecycle management.

Keeps item records and their photo files linked. There is no transaction
spanning the record store and the uploads directory, so every multi-step
operation orders its side effects so that a crash leaves at worst an
unreferenced photo file, and undoes a freshly written photo when a later step
fails:

- register: store photo, then create record (photo removed if create fails)
- replace_photo: store new photo, repoint record, then remove old photo
- delete: remove record, then remove photo

Unreferenced photos left by crashes can be reclaimed with ``sweep_orphans``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from inventory.core.exceptions import AppException, NotFoundError, StorageError
from inventory.crud.base import ItemRepository, check_name
from inventory.schemas.item import Item, SearchView
from inventory.services.blob_store import BlobStore, Upload
from inventory.services.formatter import PhotoUrl, format_search


LOG = logging.getLogger(__name__)


async def _discard_upload(upload: Upload | None) -> None:
    close = getattr(upload, "close", None)
    if close is not None:
        await close()


class InventoryService:
    """The only component that creates or breaks the item to photo link."""

    def __init__(self, repository: ItemRepository, blobs: BlobStore) -> None:
        self.repository = repository
        self.blobs = blobs

    async def _visible(self, item: Item) -> Item:
        # A record pointing at a missing file reads as having no photo
        if item.photo_ref and not await self.blobs.exists(item.photo_ref):
            LOG.warning("dangling photo reference id=%s blob=%s", item.id, item.photo_ref)
            return item.model_copy(update={"photo_ref": None})
        return item

    async def _remove_blob_quietly(self, blob_name: str, *, reason: str) -> None:
        try:
            await self.blobs.delete(blob_name)
        except StorageError as exc:
            LOG.warning("photo left behind blob=%s reason=%s err=%s", blob_name, reason, exc)

    async def register(
        self,
        name: str | None,
        description: str | None = None,
        upload: Upload | None = None,
    ) -> Item:
        try:
            check_name(name)
        except AppException:
            await _discard_upload(upload)
            raise

        photo_ref = await self.blobs.put(upload) if upload is not None else None
        try:
            item = await self.repository.create(name, description or "", photo_ref)
        except Exception:
            if photo_ref is not None:
                await self._remove_blob_quietly(photo_ref, reason="create failed")
            raise
        LOG.info("item registered id=%s photo=%s", item.id, photo_ref)
        return item

    async def get(self, item_id: int) -> Item | None:
        item = await self.repository.get(item_id)
        return await self._visible(item) if item is not None else None

    async def list(self) -> Sequence[Item]:
        return [await self._visible(item) for item in await self.repository.list()]

    async def update_metadata(
        self,
        item_id: int,
        *,
        name: str | None = None,
        description: str | None = None,
    ) -> Item | None:
        item = await self.repository.update_metadata(item_id, name=name, description=description)
        return await self._visible(item) if item is not None else None

    async def replace_photo(self, item_id: int, upload: Upload | None = None) -> Item | None:
        """Swap the item's photo; with no upload the photo is cleared."""
        current = await self.repository.get(item_id)
        if current is None:
            await _discard_upload(upload)
            return None
        old_ref = current.photo_ref

        new_ref = await self.blobs.put(upload) if upload is not None else None
        try:
            item = await self.repository.set_photo_ref(item_id, new_ref)
        except Exception:
            if new_ref is not None:
                await self._remove_blob_quietly(new_ref, reason="photo update failed")
            raise
        if item is None:
            # Deleted between lookup and update
            if new_ref is not None:
                await self._remove_blob_quietly(new_ref, reason="item vanished")
            return None

        if old_ref is not None and old_ref != new_ref:
            await self._remove_blob_quietly(old_ref, reason="replaced")
        LOG.info("photo replaced id=%s old=%s new=%s", item_id, old_ref, new_ref)
        return item

    async def delete(self, item_id: int) -> bool:
        item = await self.repository.get(item_id)
        if item is None:
            return False
        if not await self.repository.delete(item_id):
            return False
        if item.photo_ref is not None:
            await self._remove_blob_quietly(item.photo_ref, reason="item deleted")
        return True

    async def get_photo(self, item_id: int) -> Path:
        item = await self.repository.get(item_id)
        if item is None:
            raise NotFoundError()
        if item.photo_ref is None:
            raise NotFoundError("Inventory has no photo")
        if not await self.blobs.exists(item.photo_ref):
            raise NotFoundError("Photo not found")
        return self.blobs.resolve_path(item.photo_ref)

    async def search(self, item_id: int, photo_url: PhotoUrl, include_photo_hint: bool = False) -> SearchView | None:
        item = await self.get(item_id)
        if item is None:
            return None
        return format_search(item, photo_url, include_photo_hint)

    async def sweep_orphans(self) -> Sequence[str]:
        """Delete photo files no item refers to. Run only while no writes are in flight."""
        referenced = {item.photo_ref for item in await self.repository.list() if item.photo_ref}
        removed = []
        for blob_name in await self.blobs.list_blobs():
            if blob_name in referenced:
                continue
            await self.blobs.delete(blob_name)
            removed.append(blob_name)
        LOG.info("orphan sweep done removed=%d kept=%d", len(removed), len(referenced))
        return removed
