from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from quickbite.domain.common.ids import CustomerId, MenuItemId, OrderId, RestaurantId
from quickbite.domain.pricing.delivery_fee import DeliveryFeeBreakdown


class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class OrderLine:
    product_id: MenuItemId
    quantity: int
    unit_price: float

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError("quantity must be >= 1")
        if self.unit_price < 0:
            raise ValueError("unit_price must be >= 0")

    @property
    def line_total(self) -> float:
        return self.quantity * self.unit_price


@dataclass(frozen=True)
class PricingBreakdown:
    distance: float
    zone_base_fee: float
    per_km_rate: float
    peak_multiplier: float
    delivery_fee: float
    applied_promos: list[str] = field(default_factory=list)

    @classmethod
    def from_delivery(
        cls,
        delivery: DeliveryFeeBreakdown,
        applied_promos: list[str],
    ) -> PricingBreakdown:
        return cls(
            distance=delivery.distance,
            zone_base_fee=delivery.zone_base_fee,
            per_km_rate=delivery.per_km_rate,
            peak_multiplier=delivery.peak_multiplier,
            delivery_fee=delivery.delivery_fee,
            applied_promos=list(applied_promos),
        )


@dataclass(frozen=True)
class Order:
    order_id: OrderId
    customer_id: CustomerId
    restaurant_id: RestaurantId
    status: OrderStatus
    lines: list[OrderLine]
    base_price: float
    delivery_fee: float
    promo_discount: float
    final_total: float
    breakdown: PricingBreakdown
    placed_at: datetime
    created_at: datetime
    updated_at: datetime

    def __post_init__(self) -> None:
        if not self.lines:
            raise ValueError("order must contain at least one line")
        if self.final_total < 0:
            raise ValueError("final_total must be >= 0")

    @property
    def total_items(self) -> int:
        return sum(line.quantity for line in self.lines)


def base_price_of(lines: list[OrderLine]) -> float:
    return sum((line.line_total for line in lines), 0.0)


def final_total_of(base_price: float, delivery_fee: float, promo_discount: float) -> float:
    return max(0.0, base_price + delivery_fee - promo_discount)


def create_pending_order(
    order_id: OrderId,
    customer_id: CustomerId,
    restaurant_id: RestaurantId,
    lines: list[OrderLine],
    delivery: DeliveryFeeBreakdown,
    promo_discount: float,
    applied_promos: list[str],
    placed_at: datetime,
    now: datetime,
) -> Order:
    if not lines:
        raise ValueError("order must contain at least one line")

    base_price = base_price_of(lines)
    return Order(
        order_id=order_id,
        customer_id=customer_id,
        restaurant_id=restaurant_id,
        status=OrderStatus.PENDING,
        lines=lines,
        base_price=base_price,
        delivery_fee=delivery.delivery_fee,
        promo_discount=promo_discount,
        final_total=final_total_of(base_price, delivery.delivery_fee, promo_discount),
        breakdown=PricingBreakdown.from_delivery(delivery, applied_promos),
        placed_at=placed_at,
        created_at=now,
        updated_at=now,
    )
