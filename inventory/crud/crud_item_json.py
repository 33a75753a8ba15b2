from __future__ import annotations

import asyncio
import json
import logging
import uuid
from pathlib import Path
from typing import Any, Dict, Sequence

import aiofiles
import aiofiles.os

from inventory.core.exceptions import RepositoryError
from inventory.crud.base import ItemRepository, check_name
from inventory.schemas.item import Item


LOG = logging.getLogger(__name__)


def _empty_document() -> Dict[str, Any]:
    return {"nextId": 1, "list": []}


class JsonItemStore(ItemRepository):
    """Flat-file item store.

    The whole collection lives in memory as ``{"nextId": int, "list": [...]}``
    and the complete document is rewritten after every mutation. Mutations are
    serialized by one lock; the in-memory state is replaced only after the
    file has been written, so a failed flush changes nothing.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._doc: Dict[str, Any] = _empty_document()
        self._lock = asyncio.Lock()

    async def open(self) -> None:
        async with self._lock:
            if not await aiofiles.os.path.exists(self.path):
                await aiofiles.os.makedirs(self.path.parent, exist_ok=True)
                await self._flush(_empty_document())
                self._doc = _empty_document()
                LOG.info("inventory file created path=%s", self.path)
                return
            try:
                async with aiofiles.open(self.path, mode="r", encoding="utf-8") as f:
                    raw = json.loads(await f.read())
                items = [Item.model_validate(entry).model_dump(by_alias=True) for entry in raw["list"]]
                next_id = int(raw["nextId"])
            except (OSError, ValueError, KeyError, TypeError) as exc:
                raise RepositoryError(f"Could not load inventory file {self.path}: {exc}") from exc
            self._doc = {"nextId": next_id, "list": items}
            LOG.info("inventory file loaded path=%s items=%d next_id=%d", self.path, len(items), next_id)

    async def _flush(self, doc: Dict[str, Any]) -> None:
        tmp_path = self.path.with_name(f".{self.path.name}.{uuid.uuid4().hex}.tmp")
        try:
            async with aiofiles.open(tmp_path, mode="w", encoding="utf-8") as f:
                await f.write(json.dumps(doc, indent=2))
            await aiofiles.os.replace(tmp_path, self.path)
        except OSError as exc:
            try:
                await aiofiles.os.remove(tmp_path)
            except FileNotFoundError:
                pass
            raise RepositoryError(f"Could not write inventory file {self.path}: {exc}") from exc

    def _index_of(self, items: list, item_id: int) -> int | None:
        for idx, entry in enumerate(items):
            if entry["id"] == item_id:
                return idx
        return None

    async def create(self, name: str, description: str = "", photo_ref: str | None = None) -> Item:
        check_name(name)
        async with self._lock:
            item_id = self._doc["nextId"]
            item = Item(id=item_id, name=name, description=description or "", photo_ref=photo_ref)
            doc = {
                "nextId": item_id + 1,
                "list": [*self._doc["list"], item.model_dump(by_alias=True)],
            }
            await self._flush(doc)
            self._doc = doc
        LOG.info("item created id=%s photo=%s", item_id, photo_ref)
        return item

    async def get(self, item_id: int) -> Item | None:
        idx = self._index_of(self._doc["list"], item_id)
        if idx is None:
            return None
        return Item.model_validate(self._doc["list"][idx])

    async def list(self) -> Sequence[Item]:
        return [Item.model_validate(entry) for entry in self._doc["list"]]

    async def update_metadata(
        self,
        item_id: int,
        *,
        name: str | None = None,
        description: str | None = None,
    ) -> Item | None:
        changes = {"inventory_name": name, "description": description}
        return await self._update(item_id, {k: v for k, v in changes.items() if v is not None})

    async def set_photo_ref(self, item_id: int, photo_ref: str | None) -> Item | None:
        return await self._update(item_id, {"photo": photo_ref})

    async def _update(self, item_id: int, obj_data: Dict[str, Any]) -> Item | None:
        async with self._lock:
            items = self._doc["list"]
            idx = self._index_of(items, item_id)
            if idx is None:
                return None
            if "inventory_name" in obj_data:
                check_name(obj_data["inventory_name"])
            entry = {**items[idx], **obj_data}
            doc = {
                "nextId": self._doc["nextId"],
                "list": [*items[:idx], entry, *items[idx + 1:]],
            }
            await self._flush(doc)
            self._doc = doc
        return Item.model_validate(entry)

    async def delete(self, item_id: int) -> bool:
        async with self._lock:
            items = self._doc["list"]
            idx = self._index_of(items, item_id)
            if idx is None:
                return False
            doc = {
                "nextId": self._doc["nextId"],
                "list": [*items[:idx], *items[idx + 1:]],
            }
            await self._flush(doc)
            self._doc = doc
        LOG.info("item deleted id=%s", item_id)
        return True
