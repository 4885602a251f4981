from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from quickbite.application.pricing.promotions import PromotionEngine
from quickbite.domain.common.geo import GeoPoint
from quickbite.domain.common.ids import CustomerId, PromotionId, RestaurantId, ZoneId
from quickbite.domain.customer.entities import Customer
from quickbite.domain.promotion.engine import evaluate_promotions
from quickbite.domain.promotion.entities import Promotion, PromotionKind
from quickbite.domain.restaurant.entities import Restaurant

ZONE = ZoneId("zone_1")


def _customer(first_order_completed: bool = False) -> Customer:
    return Customer(
        customer_id=CustomerId("cust_1"),
        name="Ada",
        location=GeoPoint(lat=24.90, lon=66.99),
        zone_id=ZONE,
        first_order_completed=first_order_completed,
    )


def _restaurant(restaurant_id: str = "rest_1") -> Restaurant:
    return Restaurant(
        restaurant_id=RestaurantId(restaurant_id),
        name="Noodle Bar",
        location=GeoPoint(lat=24.80, lon=67.02),
    )


def _first_order(discount: float = 0.1, active: bool = True) -> Promotion:
    return Promotion(
        promotion_id=PromotionId("p_first"),
        name="WELCOME10",
        kind=PromotionKind.FIRST_ORDER,
        discount=discount,
        active=active,
    )


def _restaurant_promo(restaurant_id: str = "rest_1", discount: float = 0.15) -> Promotion:
    return Promotion(
        promotion_id=PromotionId("p_rest"),
        name="NOODLE15",
        kind=PromotionKind.RESTAURANT,
        discount=discount,
        restaurant_id=RestaurantId(restaurant_id),
    )


def _zone_promo(zone_id: ZoneId = ZONE, flat: float = 5.0) -> Promotion:
    return Promotion(
        promotion_id=PromotionId("p_zone"),
        name="ZONE5",
        kind=PromotionKind.ZONE,
        flat=flat,
        zone_id=zone_id,
    )


class FakePromotionRepository:
    def __init__(self, promotions: list[Promotion]) -> None:
        self.promotions = promotions
        self.calls = 0

    def list_active(self) -> list[Promotion]:
        self.calls += 1
        return [promotion for promotion in self.promotions if promotion.active]


def test_fraction_promotions_stack_additively() -> None:
    result = evaluate_promotions(
        [_first_order(0.1), _restaurant_promo(discount=0.15)],
        base_price=200.0,
        customer=_customer(),
        restaurant=_restaurant(),
        zone_id=ZONE,
    )

    assert result.discount == pytest.approx(200.0 * 0.1 + 200.0 * 0.15)
    assert result.applied_names == ("WELCOME10", "NOODLE15")


def test_first_order_skipped_after_completed_order() -> None:
    result = evaluate_promotions(
        [_first_order()],
        base_price=200.0,
        customer=_customer(first_order_completed=True),
        restaurant=_restaurant(),
        zone_id=ZONE,
    )

    assert result.discount == 0
    assert result.applied_names == ()


def test_restaurant_promotion_only_for_its_restaurant() -> None:
    result = evaluate_promotions(
        [_restaurant_promo(restaurant_id="rest_other")],
        base_price=200.0,
        customer=_customer(),
        restaurant=_restaurant(),
        zone_id=ZONE,
    )

    assert result.discount == 0
    assert result.applied_names == ()


def test_zone_promotion_takes_flat_amount() -> None:
    result = evaluate_promotions(
        [_zone_promo(flat=5.0), _zone_promo(zone_id=ZoneId("zone_2"), flat=9.0)],
        base_price=1000.0,
        customer=_customer(),
        restaurant=_restaurant(),
        zone_id=ZONE,
    )

    assert result.discount == 5.0
    assert result.applied_names == ("ZONE5",)


def test_inactive_promotions_never_apply() -> None:
    result = evaluate_promotions(
        [_first_order(active=False)],
        base_price=200.0,
        customer=_customer(),
        restaurant=_restaurant(),
        zone_id=ZONE,
    )

    assert result.discount == 0
    assert result.applied_names == ()


def test_no_promotions_means_no_discount() -> None:
    result = evaluate_promotions(
        [],
        base_price=200.0,
        customer=_customer(),
        restaurant=_restaurant(),
        zone_id=ZONE,
    )

    assert result.discount == 0.0
    assert result.applied_names == ()


def test_stacked_discount_is_not_capped() -> None:
    result = evaluate_promotions(
        [_first_order(1.0), _zone_promo(flat=50.0)],
        base_price=20.0,
        customer=_customer(),
        restaurant=_restaurant(),
        zone_id=ZONE,
    )

    assert result.discount == 70.0


def test_engine_reads_promotions_on_every_call() -> None:
    repository = FakePromotionRepository([_first_order()])
    engine = PromotionEngine(repository)

    first = engine.apply(100.0, _customer(), _restaurant(), ZONE)
    repository.promotions = [_first_order(), _zone_promo()]
    second = engine.apply(100.0, _customer(), _restaurant(), ZONE)

    assert repository.calls == 2
    assert first.applied_names == ("WELCOME10",)
    assert second.applied_names == ("WELCOME10", "ZONE5")
    assert second.discount == pytest.approx(15.0)


@pytest.mark.parametrize("discount", [-0.1, 1.5])
def test_promotion_rejects_out_of_range_fraction(discount: float) -> None:
    with pytest.raises(ValueError):
        _first_order(discount=discount)


def test_scoped_promotions_require_their_target() -> None:
    with pytest.raises(ValueError):
        Promotion(promotion_id=PromotionId("p"), name="X", kind=PromotionKind.RESTAURANT)
    with pytest.raises(ValueError):
        Promotion(promotion_id=PromotionId("p"), name="Y", kind=PromotionKind.ZONE)
