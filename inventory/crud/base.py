from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from inventory.core.exceptions import ValidationError
from inventory.schemas.item import Item


def check_name(name: str | None) -> str:
    """Return ``name`` unchanged, or raise if it is missing or blank."""
    if name is None or not name.strip():
        raise ValidationError("Name required", details={"field": "inventory_name"})
    return name


class ItemRepository(ABC):
    """Durable storage for item records.

    Absence is reported as ``None`` / ``False``. Store failures raise
    ``RepositoryError``.
    """

    async def open(self) -> None:
        """Prepare the backing store (create tables, load the document)."""

    async def close(self) -> None:
        """Release resources held by the backend."""

    @abstractmethod
    async def create(self, name: str, description: str = "", photo_ref: str | None = None) -> Item:
        """Assign the next id, persist the record and return it."""

    @abstractmethod
    async def get(self, item_id: int) -> Item | None:
        ...

    @abstractmethod
    async def list(self) -> Sequence[Item]:
        ...

    @abstractmethod
    async def update_metadata(
        self,
        item_id: int,
        *,
        name: str | None = None,
        description: str | None = None,
    ) -> Item | None:
        """Partial update; fields passed as ``None`` keep their value."""

    @abstractmethod
    async def set_photo_ref(self, item_id: int, photo_ref: str | None) -> Item | None:
        ...

    @abstractmethod
    async def delete(self, item_id: int) -> bool:
        """Remove the record; ``True`` if it existed."""
