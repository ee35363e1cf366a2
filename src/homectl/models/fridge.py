"""Fridge inventory models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

DEFAULT_QUANTITY = "1개"
DEFAULT_CATEGORY = "기타"


class FridgeItem(BaseModel):
    model_config = {"extra": "allow"}

    id: int
    name: str
    quantity: str = DEFAULT_QUANTITY
    expiry: str | None = None
    category: str = DEFAULT_CATEGORY


class FridgeInventory(BaseModel):
    model_config = {"extra": "allow", "populate_by_name": True}

    items: list[FridgeItem] = Field(default_factory=list)
    last_updated: datetime | None = Field(default=None, alias="lastUpdated")

    def next_id(self) -> int:
        return max((item.id for item in self.items), default=0) + 1

    def to_document(self) -> dict[str, object]:
        return self.model_dump(mode="json", by_alias=True)
