from __future__ import annotations

from typing import Any

from sqlalchemy import Engine
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from quickbite.domain.common.geo import GeoPoint
# Importing the order models registers their tables on Base.metadata.
from quickbite.infrastructure.db.models import order as _order_models  # noqa: F401
from quickbite.infrastructure.db.models.catalog import (
    Base,
    CustomerModel,
    MenuItemModel,
    RestaurantModel,
)
from quickbite.infrastructure.db.models.pricing import DeliveryZoneModel, PromotionModel
from quickbite.infrastructure.db.session import get_engine

CUSTOMERS: list[dict[str, Any]] = [
    {
        "id": "CUST-12",
        "name": "Anas Ahmed",
        "email": "anas@example.com",
        "lat": 24.90,
        "lon": 66.99,
        "zone": "Suburban",
        "first_order_completed": False,
    },
]

RESTAURANTS: list[dict[str, Any]] = [
    {
        "id": "REST-09",
        "name": "Burger King DHA",
        "lat": 24.80,
        "lon": 67.02,
        "zone": "Urban",
        "cuisine": "burgers",
    },
]

DELIVERY_ZONES: list[dict[str, Any]] = [
    {"zone": "Urban", "base_fee": 25.0, "per_km_rate": 2.5},
    {"zone": "Suburban", "base_fee": 35.0, "per_km_rate": 3.2},
    {"zone": "Remote", "base_fee": 50.0, "per_km_rate": 4.5},
]

MENU_ITEMS: list[dict[str, Any]] = [
    {"id": "ITEM-101", "restaurant_id": "REST-09", "name": "Whopper", "price": 450.0},
    {"id": "ITEM-303", "restaurant_id": "REST-09", "name": "Fries", "price": 300.0},
]

PROMOTIONS: list[dict[str, Any]] = [
    {
        "id": "PROMO-001",
        "name": "WELCOME10",
        "type": "FIRST_ORDER",
        "restaurant_id": None,
        "zone": None,
        "discount": 0.10,
        "flat": 0.0,
        "active": True,
    },
    {
        "id": "PROMO-002",
        "name": "BK-WEEKEND",
        "type": "RESTAURANT",
        "restaurant_id": "REST-09",
        "zone": None,
        "discount": 0.15,
        "flat": 0.0,
        "active": False,
    },
    {
        "id": "PROMO-003",
        "name": "SUBURBAN-5",
        "type": "ZONE",
        "restaurant_id": None,
        "zone": "Suburban",
        "discount": 0.0,
        "flat": 5.0,
        "active": True,
    },
]


def _insert_for(engine: Engine):
    if engine.dialect.name == "postgresql":
        return postgresql.insert
    if engine.dialect.name == "sqlite":
        return sqlite.insert
    raise RuntimeError(f"seeding is not supported for dialect={engine.dialect.name}")


def _upsert(session: Session, insert, model: type[Base], rows: list[dict[str, Any]]) -> None:
    key_names = {column.name for column in model.__table__.primary_key.columns}
    for row in rows:
        session.execute(
            insert(model)
            .values(**row)
            .on_conflict_do_update(
                index_elements=sorted(key_names),
                set_={key: value for key, value in row.items() if key not in key_names},
            )
        )


def _check_coordinates(rows: list[dict[str, Any]]) -> None:
    for row in rows:
        if not GeoPoint(lat=row["lat"], lon=row["lon"]).in_range:
            raise ValueError(
                f"coordinates out of range for {row['id']}: ({row['lat']}, {row['lon']})"
            )


def seed(engine: Engine) -> None:
    _check_coordinates(CUSTOMERS)
    _check_coordinates(RESTAURANTS)
    Base.metadata.create_all(engine)
    insert = _insert_for(engine)

    with Session(engine) as session:
        _upsert(session, insert, RestaurantModel, RESTAURANTS)
        _upsert(session, insert, CustomerModel, CUSTOMERS)
        _upsert(session, insert, DeliveryZoneModel, DELIVERY_ZONES)
        _upsert(session, insert, MenuItemModel, MENU_ITEMS)
        _upsert(session, insert, PromotionModel, PROMOTIONS)
        session.commit()


def main() -> None:
    seed(get_engine(timeout_seconds=2.0))
    print("seed complete")


if __name__ == "__main__":
    main()
