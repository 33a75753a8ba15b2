from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import FileResponse

from inventory.api.deps import get_inventory_service, get_item_id, get_photo_url, parse_item_id
from inventory.core.exceptions import NotFoundError
from inventory.schemas.item import ItemUpdate, ItemView, SearchView
from inventory.services.formatter import PhotoUrl, format_item
from inventory.services.inventory import InventoryService

router = APIRouter()


@router.post("/register", response_model=ItemView)
async def register_item(
    inventory_name: str | None = Form(None),
    description: str | None = Form(None),
    photo: UploadFile | None = File(None),
    service: InventoryService = Depends(get_inventory_service),
    photo_url: PhotoUrl = Depends(get_photo_url),
) -> ItemView:
    """Register a new item with an optional photo."""
    item = await service.register(inventory_name, description, photo)
    return format_item(item, photo_url)


@router.get("/inventory", response_model=list[ItemView])
async def list_items(
    service: InventoryService = Depends(get_inventory_service),
    photo_url: PhotoUrl = Depends(get_photo_url),
) -> list[ItemView]:
    """List all items."""
    return [format_item(item, photo_url) for item in await service.list()]


@router.get("/inventory/{item_id}", response_model=ItemView)
async def read_item(
    item_id: int = Depends(get_item_id),
    service: InventoryService = Depends(get_inventory_service),
    photo_url: PhotoUrl = Depends(get_photo_url),
) -> ItemView:
    """Get item by ID."""
    item = await service.get(item_id)
    if item is None:
        raise NotFoundError()
    return format_item(item, photo_url)


@router.put("/inventory/{item_id}", response_model=ItemView)
async def update_item(
    item_in: ItemUpdate,
    item_id: int = Depends(get_item_id),
    service: InventoryService = Depends(get_inventory_service),
    photo_url: PhotoUrl = Depends(get_photo_url),
) -> ItemView:
    """Update name and/or description."""
    item = await service.update_metadata(item_id, name=item_in.inventory_name, description=item_in.description)
    if item is None:
        raise NotFoundError()
    return format_item(item, photo_url)


@router.get("/inventory/{item_id}/photo", name="get_photo")
async def read_photo(
    item_id: int = Depends(get_item_id),
    service: InventoryService = Depends(get_inventory_service),
) -> FileResponse:
    """Return the raw photo bytes."""
    path = await service.get_photo(item_id)
    return FileResponse(path, media_type="image/jpeg")


@router.put("/inventory/{item_id}/photo", response_model=ItemView)
async def replace_photo(
    item_id: int = Depends(get_item_id),
    photo: UploadFile | None = File(None),
    service: InventoryService = Depends(get_inventory_service),
    photo_url: PhotoUrl = Depends(get_photo_url),
) -> ItemView:
    """Replace the photo; sending no file clears it."""
    item = await service.replace_photo(item_id, photo)
    if item is None:
        raise NotFoundError()
    return format_item(item, photo_url)


@router.delete("/inventory/{item_id}")
async def delete_item(
    item_id: int = Depends(get_item_id),
    service: InventoryService = Depends(get_inventory_service),
) -> dict[str, str]:
    """Delete an item and its photo."""
    if not await service.delete(item_id):
        raise NotFoundError()
    return {"status": "ok"}


@router.post("/search", response_model=SearchView)
async def search_item(
    id: str | None = Form(None),
    has_photo: str | None = Form(None),
    service: InventoryService = Depends(get_inventory_service),
    photo_url: PhotoUrl = Depends(get_photo_url),
) -> SearchView:
    """Find an item by id; ``has_photo=on`` appends a photo hint to the description."""
    item_id = parse_item_id(id)
    result = await service.search(item_id, photo_url, include_photo_hint=has_photo == "on")
    if result is None:
        raise NotFoundError()
    return result
