from __future__ import annotations

from typing import Callable

from inventory.schemas.item import Item, ItemView, SearchView


PhotoUrl = Callable[[int], str]

NO_PHOTO_HINT = "[No photo available]"


def format_item(item: Item, photo_url: PhotoUrl) -> ItemView:
    """Map a stored record to its client view, swapping the blob name for a URL."""
    return ItemView(
        id=item.id,
        inventory_name=item.name,
        description=item.description,
        photo=photo_url(item.id) if item.photo_ref else None,
    )


def photo_hint(item: Item, photo_url: PhotoUrl) -> str:
    if item.photo_ref:
        return f"[Photo: {photo_url(item.id)}]"
    return NO_PHOTO_HINT


def format_search(item: Item, photo_url: PhotoUrl, include_photo_hint: bool = False) -> SearchView:
    """Search view: ``photo`` is dropped, the hint is appended for display only."""
    description = item.description
    if include_photo_hint:
        description = f"{description} {photo_hint(item, photo_url)}"
    return SearchView(id=item.id, inventory_name=item.name, description=description)
