from __future__ import annotations

from typing import NewType

CustomerId = NewType("CustomerId", str)
RestaurantId = NewType("RestaurantId", str)
MenuItemId = NewType("MenuItemId", str)
ZoneId = NewType("ZoneId", str)
PromotionId = NewType("PromotionId", str)
OrderId = NewType("OrderId", str)
