from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

import quickbite.api.routes.orders as orders_route
from quickbite.api.main import app
from quickbite.application.pricing.delivery_fee import DeliveryFeeCalculator
from quickbite.application.pricing.promotions import PromotionEngine
from quickbite.application.pricing.zone_pricing import ZonePricing
from quickbite.application.use_cases.create_order import CreateOrder
from quickbite.application.use_cases.get_order import GetOrder
from quickbite.domain.common.geo import GeoPoint
from quickbite.domain.common.ids import (
    CustomerId,
    MenuItemId,
    OrderId,
    PromotionId,
    RestaurantId,
    ZoneId,
)
from quickbite.domain.customer.entities import Customer
from quickbite.domain.menu.entities import MenuItem
from quickbite.domain.order.entities import Order
from quickbite.domain.pricing.peak import PeakRule, PeakSchedule
from quickbite.domain.pricing.zone import DeliveryZone
from quickbite.domain.promotion.entities import Promotion, PromotionKind
from quickbite.domain.restaurant.entities import Restaurant


class InMemoryStore:
    def __init__(self) -> None:
        self.customers = {
            CustomerId("cust_1"): Customer(
                customer_id=CustomerId("cust_1"),
                name="Ada",
                email="ada@example.com",
                location=GeoPoint(lat=24.86, lon=67.0),
                zone_id=ZoneId("zone_1"),
            )
        }
        self.restaurants = {
            RestaurantId("rest_1"): Restaurant(
                restaurant_id=RestaurantId("rest_1"),
                name="Noodle Bar",
                location=GeoPoint(lat=24.86, lon=67.0),
            )
        }
        self.items = {
            MenuItemId("item_ramen"): MenuItem(
                item_id=MenuItemId("item_ramen"), name="Ramen", price=12.0
            ),
            MenuItemId("item_water"): MenuItem(
                item_id=MenuItemId("item_water"), name="Tap water", price=0.0
            ),
        }
        self.zones = {
            ZoneId("zone_1"): DeliveryZone(zone_id=ZoneId("zone_1"), base_fee=2.0, per_km_rate=0.5)
        }
        self.promotions = [
            Promotion(
                promotion_id=PromotionId("promo_1"),
                name="WELCOME10",
                kind=PromotionKind.FIRST_ORDER,
                discount=0.10,
            )
        ]
        self.orders: dict[OrderId, Order] = {}
        self.published: list[tuple[str, str]] = []


class FakeCustomerRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def get(self, customer_id: CustomerId) -> Customer | None:
        return self._store.customers.get(customer_id)


class FakeRestaurantRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def get(self, restaurant_id: RestaurantId) -> Restaurant | None:
        return self._store.restaurants.get(restaurant_id)


class FakeMenuItemRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def get_many(self, item_ids: Iterable[MenuItemId]) -> list[MenuItem]:
        return [self._store.items[i] for i in item_ids if i in self._store.items]


class FakeZoneRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def get(self, zone_id: ZoneId) -> DeliveryZone | None:
        return self._store.zones.get(zone_id)


class FakePromotionRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def list_active(self) -> list[Promotion]:
        return [promotion for promotion in self._store.promotions if promotion.active]


class FakeOrderRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def add(self, order: Order) -> Order:
        self._store.orders[order.order_id] = order
        return order

    def get(self, order_id: OrderId) -> Order | None:
        return self._store.orders.get(order_id)


class FakePublisher:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def publish(self, channel: str, message: str) -> None:
        self._store.published.append((channel, message))


@pytest.fixture()
def store(monkeypatch) -> InMemoryStore:
    store = InMemoryStore()

    def create_order_use_case() -> CreateOrder:
        return CreateOrder(
            customer_repository=FakeCustomerRepository(store),
            restaurant_repository=FakeRestaurantRepository(store),
            menu_item_repository=FakeMenuItemRepository(store),
            order_repository=FakeOrderRepository(store),
            delivery_fee_calculator=DeliveryFeeCalculator(
                zone_pricing=ZonePricing(FakeZoneRepository(store)),
                peak_schedule=PeakSchedule([PeakRule(start=18, end=22, multiplier=1.5)]),
            ),
            promotion_engine=PromotionEngine(FakePromotionRepository(store)),
            publisher=FakePublisher(store),
        )

    def get_order_use_case() -> GetOrder:
        return GetOrder(
            order_repository=FakeOrderRepository(store),
            customer_repository=FakeCustomerRepository(store),
            restaurant_repository=FakeRestaurantRepository(store),
        )

    monkeypatch.setattr(orders_route, "_create_order_use_case", create_order_use_case)
    monkeypatch.setattr(orders_route, "_get_order_use_case", get_order_use_case)
    return store


def _payload(**overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "customerId": "cust_1",
        "restaurantId": "rest_1",
        "items": [{"productId": "item_ramen", "qty": 2}],
        "placedAt": datetime(2025, 12, 4, 19, 30, tzinfo=timezone.utc).isoformat(),
    }
    payload.update(overrides)
    return payload


def test_create_order_returns_priced_order(store: InMemoryStore) -> None:
    client = TestClient(app)
    response = client.post("/v1/orders", json=_payload(), headers={"X-Request-Id": "req-42"})

    assert response.status_code == 201
    assert response.headers["X-Request-Id"] == "req-42"
    body = response.json()
    assert body["status"] == "pending"
    assert body["basePrice"] == 24.0
    assert body["deliveryFee"] == 3.0
    assert body["promoDiscount"] == pytest.approx(2.4)
    assert body["finalTotal"] == pytest.approx(24.6)
    assert body["breakdown"] == {
        "distance": 0.0,
        "zoneBaseFee": 2.0,
        "perKmRate": 0.5,
        "peakMultiplier": 1.5,
        "deliveryFee": 3.0,
        "appliedPromos": ["WELCOME10"],
    }
    assert body["items"] == [{"productId": "item_ramen", "qty": 2, "unitPrice": 12.0}]
    assert OrderId(body["orderId"]) in store.orders
    assert store.published[0][0] == "events:rest_1"


def test_get_order_returns_stored_order_with_references(store: InMemoryStore) -> None:
    client = TestClient(app)
    order_id = client.post("/v1/orders", json=_payload()).json()["orderId"]

    response = client.get(f"/v1/orders/{order_id}")

    assert response.status_code == 200
    body = response.json()
    assert body["orderId"] == order_id
    assert body["finalTotal"] == pytest.approx(24.6)
    assert body["customer"] == {
        "customerId": "cust_1",
        "name": "Ada",
        "email": "ada@example.com",
    }
    assert body["restaurant"]["name"] == "Noodle Bar"
    assert body["restaurant"]["location"] == {"lat": 24.86, "lon": 67.0}


def test_get_unknown_order_is_404(store: InMemoryStore) -> None:
    client = TestClient(app)
    response = client.get("/v1/orders/ord_missing")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "ORDER_NOT_FOUND"


@pytest.mark.parametrize(
    ("overrides", "code"),
    [
        ({"customerId": "cust_missing"}, "CUSTOMER_NOT_FOUND"),
        ({"restaurantId": "rest_missing"}, "RESTAURANT_NOT_FOUND"),
    ],
)
def test_missing_references_are_404(
    store: InMemoryStore, overrides: dict[str, object], code: str
) -> None:
    client = TestClient(app)
    response = client.post("/v1/orders", json=_payload(**overrides))

    assert response.status_code == 404
    body = response.json()
    assert body["error"]["code"] == code
    assert body["requestId"]
    assert store.orders == {}


def test_unknown_zone_is_404(store: InMemoryStore) -> None:
    store.zones.clear()
    client = TestClient(app)
    response = client.post("/v1/orders", json=_payload())

    assert response.status_code == 404
    assert response.json()["error"] == {
        "code": "DELIVERY_ZONE_NOT_FOUND",
        "message": "DeliveryZone not found",
        "details": {"entity": "DeliveryZone"},
    }


def test_missing_items_are_listed(store: InMemoryStore) -> None:
    client = TestClient(app)
    response = client.post(
        "/v1/orders",
        json=_payload(
            items=[
                {"productId": "item_ramen", "qty": 1},
                {"productId": "item_sushi", "qty": 1},
                {"productId": "item_udon", "qty": 1},
            ]
        ),
    )

    assert response.status_code == 400
    assert response.json()["error"] == {
        "code": "VALIDATION_FAILED",
        "message": "Some items not found",
        "details": {
            "errors": [
                {"field": "items", "message": "Item not found: item_sushi"},
                {"field": "items", "message": "Item not found: item_udon"},
            ]
        },
    }


def test_zero_value_order_is_400(store: InMemoryStore) -> None:
    client = TestClient(app)
    response = client.post(
        "/v1/orders", json=_payload(items=[{"productId": "item_water", "qty": 1}])
    )

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_FAILED"
    assert error["message"] == "Invalid order total"


@pytest.mark.parametrize(
    "overrides",
    [
        {"items": []},
        {"items": [{"productId": "item_ramen", "qty": 0}]},
        {"placedAt": "not-a-timestamp"},
        {"customerId": ""},
    ],
)
def test_malformed_requests_are_rejected(
    store: InMemoryStore, overrides: dict[str, object]
) -> None:
    client = TestClient(app)
    response = client.post("/v1/orders", json=_payload(**overrides))

    assert response.status_code == 400
    body = response.json()
    assert body["error"]["code"] == "INVALID_REQUEST"
    assert body["error"]["details"]["errors"]
    assert store.orders == {}


def test_pricing_metrics_are_exposed(store: InMemoryStore) -> None:
    client = TestClient(app)
    assert client.post("/v1/orders", json=_payload()).status_code == 201

    response = client.get("/metrics")

    assert response.status_code == 200
    assert 'quickbite_orders_created_total{restaurant_id="rest_1"}' in response.text
    assert 'quickbite_promotions_applied_total{promotion="WELCOME10"}' in response.text
    assert "quickbite_delivery_fee_bucket" in response.text
