from fastapi import Request

from inventory.core.exceptions import NotFoundError
from inventory.services.formatter import PhotoUrl
from inventory.services.inventory import InventoryService


def parse_item_id(raw: str | None) -> int:
    """Ids that are not integers name no item."""
    try:
        return int(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise NotFoundError()


def get_item_id(item_id: str) -> int:
    """FastAPI dependency parsing the ``{item_id}`` path segment."""
    return parse_item_id(item_id)


def get_inventory_service(request: Request) -> InventoryService:
    """FastAPI dependency returning the service built at startup."""
    return request.app.state.inventory


def get_photo_url(request: Request) -> PhotoUrl:
    """FastAPI dependency returning a builder for absolute photo URLs."""
    base_url = request.app.state.settings.PUBLIC_BASE_URL
    api_prefix = request.app.state.settings.API_PREFIX

    def photo_url(item_id: int) -> str:
        if base_url:
            return f"{base_url.rstrip('/')}{api_prefix}/inventory/{item_id}/photo"
        return str(request.url_for("get_photo", item_id=item_id))

    return photo_url
