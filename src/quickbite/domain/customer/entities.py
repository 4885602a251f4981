from __future__ import annotations

from dataclasses import dataclass

from quickbite.domain.common.geo import GeoPoint
from quickbite.domain.common.ids import CustomerId, ZoneId


@dataclass(frozen=True)
class Customer:
    customer_id: CustomerId
    name: str
    location: GeoPoint
    zone_id: ZoneId
    first_order_completed: bool = False
    email: str | None = None
