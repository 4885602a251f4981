from __future__ import annotations

from dataclasses import dataclass

from quickbite.domain.common.ids import MenuItemId, RestaurantId


@dataclass(frozen=True)
class MenuItem:
    item_id: MenuItemId
    name: str
    price: float
    restaurant_id: RestaurantId | None = None

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("name must be non-empty")
        if self.price < 0:
            raise ValueError("price must be >= 0")
