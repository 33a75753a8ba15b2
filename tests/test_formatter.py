"""Tests for the client view mapping."""

from inventory.schemas.item import Item
from inventory.services.formatter import format_item, format_search


def photo_url(item_id: int) -> str:
    return f"http://localhost:3000/inventory/{item_id}/photo"


def test_format_item_with_photo():
    item = Item(id=3, name="Drill", description="cordless", photo_ref="abc")

    view = format_item(item, photo_url)

    assert view.model_dump() == {
        "id": 3,
        "inventory_name": "Drill",
        "description": "cordless",
        "photo": "http://localhost:3000/inventory/3/photo",
    }


def test_format_item_without_photo():
    view = format_item(Item(id=1, name="Saw"), photo_url)

    assert view.photo is None
    assert view.description == ""


def test_format_search_omits_photo_field():
    view = format_search(Item(id=3, name="Drill", photo_ref="abc"), photo_url)

    assert view.model_dump() == {"id": 3, "inventory_name": "Drill", "description": ""}


def test_format_search_hints():
    with_photo = format_search(Item(id=3, name="Drill", description="red", photo_ref="abc"), photo_url, True)
    without_photo = format_search(Item(id=4, name="Saw", description="red"), photo_url, True)

    assert with_photo.description == "red [Photo: http://localhost:3000/inventory/3/photo]"
    assert without_photo.description == "red [No photo available]"


def test_item_accepts_document_keys():
    item = Item.model_validate({"id": 1, "inventory_name": "Saw", "description": "", "photo": None})

    assert item.name == "Saw"
    assert item.model_dump(by_alias=True) == {"id": 1, "inventory_name": "Saw", "description": "", "photo": None}
