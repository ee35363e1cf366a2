from __future__ import annotations

import logging
from datetime import datetime

from pydantic import ValidationError as PydanticValidationError

from homectl.errors import ItemNotFoundError, ValidationError
from homectl.models import FridgeInventory, FridgeItem
from homectl.models.fridge import DEFAULT_CATEGORY, DEFAULT_QUANTITY
from homectl.storage import Database

logger = logging.getLogger(__name__)


def list_items(database: Database) -> FridgeInventory:
    return database.load_fridge()


def add_item(
    database: Database,
    name: str | None,
    now: datetime,
    quantity: str | None = None,
    expiry: str | None = None,
    category: str | None = None,
) -> FridgeItem:
    if not name:
        raise ValidationError("name is required")

    inventory = database.load_fridge()
    try:
        item = FridgeItem(
            id=inventory.next_id(),
            name=name,
            quantity=quantity or DEFAULT_QUANTITY,
            expiry=expiry or None,
            category=category or DEFAULT_CATEGORY,
        )
    except PydanticValidationError as exc:
        raise ValidationError.from_pydantic(exc) from exc
    inventory.items.append(item)
    inventory.last_updated = now
    database.save_fridge(inventory)
    logger.info("Added fridge item #%d '%s'", item.id, item.name)
    return item


def remove_item(database: Database, item_id: int | None, now: datetime) -> FridgeItem:
    if item_id is None:
        raise ValidationError("id is required")

    inventory = database.load_fridge()
    for index, item in enumerate(inventory.items):
        if item.id == item_id:
            break
    else:
        raise ItemNotFoundError(item_id)

    removed = inventory.items.pop(index)
    inventory.last_updated = now
    database.save_fridge(inventory)
    logger.info("Removed fridge item #%d '%s'", removed.id, removed.name)
    return removed
