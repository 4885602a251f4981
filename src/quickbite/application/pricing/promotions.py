from __future__ import annotations

from quickbite.application.ports.repositories import PromotionRepository
from quickbite.domain.common.ids import ZoneId
from quickbite.domain.customer.entities import Customer
from quickbite.domain.promotion.engine import PromotionResult, evaluate_promotions
from quickbite.domain.restaurant.entities import Restaurant


class PromotionEngine:
    def __init__(self, promotion_repository: PromotionRepository) -> None:
        self._promotion_repository = promotion_repository

    def apply(
        self,
        base_price: float,
        customer: Customer,
        restaurant: Restaurant,
        zone_id: ZoneId,
    ) -> PromotionResult:
        # Read per call; active promotions are never cached.
        promotions = self._promotion_repository.list_active()
        return evaluate_promotions(
            promotions,
            base_price=base_price,
            customer=customer,
            restaurant=restaurant,
            zone_id=zone_id,
        )
