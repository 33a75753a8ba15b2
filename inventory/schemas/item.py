from pydantic import BaseModel, ConfigDict, Field


class Item(BaseModel):
    """Stored inventory record.

    ``name`` and ``photo_ref`` are aliased to ``inventory_name`` and
    ``photo``, the keys used in the flat-file document.
    """

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int
    name: str = Field(..., alias="inventory_name")
    description: str = ""
    photo_ref: str | None = Field(default=None, alias="photo")


class ItemUpdate(BaseModel):
    inventory_name: str | None = None
    description: str | None = None


class ItemView(BaseModel):
    """Client-facing item; ``photo`` is a URL or null."""

    id: int
    inventory_name: str
    description: str
    photo: str | None = None


class SearchView(BaseModel):
    """Search result; never carries a ``photo`` field."""

    id: int
    inventory_name: str
    description: str
