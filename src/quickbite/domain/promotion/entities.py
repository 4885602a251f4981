from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from quickbite.domain.common.ids import PromotionId, RestaurantId, ZoneId


class PromotionKind(str, Enum):
    FIRST_ORDER = "FIRST_ORDER"
    RESTAURANT = "RESTAURANT"
    ZONE = "ZONE"


@dataclass(frozen=True)
class Promotion:
    promotion_id: PromotionId
    name: str
    kind: PromotionKind
    discount: float = 0.0
    flat: float = 0.0
    restaurant_id: RestaurantId | None = None
    zone_id: ZoneId | None = None
    active: bool = True

    def __post_init__(self) -> None:
        if not 0.0 <= self.discount <= 1.0:
            raise ValueError("discount must be a fraction within [0, 1]")
        if self.flat < 0:
            raise ValueError("flat must be >= 0")
        if self.kind == PromotionKind.RESTAURANT and self.restaurant_id is None:
            raise ValueError("RESTAURANT promotion requires restaurant_id")
        if self.kind == PromotionKind.ZONE and self.zone_id is None:
            raise ValueError("ZONE promotion requires zone_id")
