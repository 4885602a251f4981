from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from quickbite.domain.common.ids import ZoneId
from quickbite.domain.customer.entities import Customer
from quickbite.domain.promotion.entities import Promotion, PromotionKind
from quickbite.domain.restaurant.entities import Restaurant


@dataclass(frozen=True)
class PromotionResult:
    discount: float = 0.0
    applied_names: tuple[str, ...] = ()


def promotion_contribution(
    promotion: Promotion,
    base_price: float,
    customer: Customer,
    restaurant: Restaurant,
    zone_id: ZoneId,
) -> float | None:
    """Return the amount a promotion takes off the order, or None when it does not apply."""
    if promotion.kind == PromotionKind.FIRST_ORDER:
        if customer.first_order_completed:
            return None
        return base_price * promotion.discount
    if promotion.kind == PromotionKind.RESTAURANT:
        if promotion.restaurant_id != restaurant.restaurant_id:
            return None
        return base_price * promotion.discount
    if promotion.kind == PromotionKind.ZONE:
        if promotion.zone_id != zone_id:
            return None
        return promotion.flat
    return None


def evaluate_promotions(
    promotions: Iterable[Promotion],
    base_price: float,
    customer: Customer,
    restaurant: Restaurant,
    zone_id: ZoneId,
) -> PromotionResult:
    # Every matching promotion stacks; the total is not capped here.
    discount = 0.0
    applied_names: list[str] = []
    for promotion in promotions:
        if not promotion.active:
            continue
        contribution = promotion_contribution(
            promotion,
            base_price=base_price,
            customer=customer,
            restaurant=restaurant,
            zone_id=zone_id,
        )
        if contribution is None:
            continue
        discount += contribution
        applied_names.append(promotion.name)
    return PromotionResult(discount=discount, applied_names=tuple(applied_names))
