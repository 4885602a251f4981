from __future__ import annotations

from typing import Iterable, Protocol

from quickbite.domain.common.ids import CustomerId, MenuItemId, OrderId, RestaurantId, ZoneId
from quickbite.domain.customer.entities import Customer
from quickbite.domain.menu.entities import MenuItem
from quickbite.domain.order.entities import Order
from quickbite.domain.pricing.zone import DeliveryZone
from quickbite.domain.promotion.entities import Promotion
from quickbite.domain.restaurant.entities import Restaurant


class CustomerRepository(Protocol):
    def get(self, customer_id: CustomerId) -> Customer | None: ...


class RestaurantRepository(Protocol):
    def get(self, restaurant_id: RestaurantId) -> Restaurant | None: ...


class MenuItemRepository(Protocol):
    def get_many(self, item_ids: Iterable[MenuItemId]) -> list[MenuItem]: ...


class DeliveryZoneRepository(Protocol):
    def get(self, zone_id: ZoneId) -> DeliveryZone | None: ...


class PromotionRepository(Protocol):
    def list_active(self) -> list[Promotion]: ...


class OrderRepository(Protocol):
    def add(self, order: Order) -> Order: ...

    def get(self, order_id: OrderId) -> Order | None: ...
