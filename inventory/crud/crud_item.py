from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from inventory.core.exceptions import RepositoryError
from inventory.crud.base import ItemRepository, check_name
from inventory.db.init_db import init_db
from inventory.db.session import build_sessionmaker
from inventory.models.item import Item as ItemRow
from inventory.schemas.item import Item


LOG = logging.getLogger(__name__)


class CRUDItem(ItemRepository):
    """Relational item store; every call runs in its own session and commit."""

    def __init__(self, engine: AsyncEngine, sessionmaker: async_sessionmaker[AsyncSession] | None = None) -> None:
        self.engine = engine
        self.sessionmaker = sessionmaker or build_sessionmaker(engine)

    async def open(self) -> None:
        try:
            await init_db(self.engine)
        except SQLAlchemyError as exc:
            raise RepositoryError(f"Could not initialize item table: {exc}") from exc

    async def close(self) -> None:
        await self.engine.dispose()

    async def create(self, name: str, description: str = "", photo_ref: str | None = None) -> Item:
        check_name(name)
        try:
            async with self.sessionmaker() as db:
                db_obj = ItemRow(name=name, description=description or "", photo_ref=photo_ref)
                db.add(db_obj)
                await db.commit()
                await db.refresh(db_obj)
                LOG.info("item created id=%s photo=%s", db_obj.id, photo_ref)
                return Item.model_validate(db_obj)
        except SQLAlchemyError as exc:
            raise RepositoryError(f"Could not create item: {exc}") from exc

    async def get(self, item_id: int) -> Item | None:
        try:
            async with self.sessionmaker() as db:
                db_obj = await db.get(ItemRow, item_id)
                return Item.model_validate(db_obj) if db_obj is not None else None
        except SQLAlchemyError as exc:
            raise RepositoryError(f"Could not read item {item_id}: {exc}") from exc

    async def list(self) -> Sequence[Item]:
        try:
            async with self.sessionmaker() as db:
                res = await db.execute(select(ItemRow).order_by(ItemRow.id))
                return [Item.model_validate(row) for row in res.scalars().all()]
        except SQLAlchemyError as exc:
            raise RepositoryError(f"Could not list items: {exc}") from exc

    async def update_metadata(
        self,
        item_id: int,
        *,
        name: str | None = None,
        description: str | None = None,
    ) -> Item | None:
        changes = {"name": name, "description": description}
        return await self._update(item_id, {k: v for k, v in changes.items() if v is not None})

    async def set_photo_ref(self, item_id: int, photo_ref: str | None) -> Item | None:
        return await self._update(item_id, {"photo_ref": photo_ref})

    async def _update(self, item_id: int, obj_data: dict) -> Item | None:
        try:
            async with self.sessionmaker() as db:
                db_obj = await db.get(ItemRow, item_id)
                if db_obj is None:
                    return None
                if "name" in obj_data:
                    check_name(obj_data["name"])
                for field, value in obj_data.items():
                    setattr(db_obj, field, value)
                await db.commit()
                await db.refresh(db_obj)
                return Item.model_validate(db_obj)
        except SQLAlchemyError as exc:
            raise RepositoryError(f"Could not update item {item_id}: {exc}") from exc

    async def delete(self, item_id: int) -> bool:
        try:
            async with self.sessionmaker() as db:
                db_obj = await db.get(ItemRow, item_id)
                if db_obj is None:
                    return False
                await db.delete(db_obj)
                await db.commit()
                LOG.info("item deleted id=%s", item_id)
                return True
        except SQLAlchemyError as exc:
            raise RepositoryError(f"Could not delete item {item_id}: {exc}") from exc
