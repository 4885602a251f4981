from __future__ import annotations

from dataclasses import dataclass

from quickbite.domain.common.geo import GeoPoint
from quickbite.domain.common.ids import RestaurantId, ZoneId


@dataclass(frozen=True)
class Restaurant:
    restaurant_id: RestaurantId
    name: str
    location: GeoPoint
    zone_id: ZoneId | None = None
    cuisine: str | None = None

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("name must be non-empty")
