from __future__ import annotations

from sqlalchemy import Engine
from sqlalchemy.orm import Session

from quickbite.application.ports.repositories import RestaurantRepository
from quickbite.domain.common.geo import GeoPoint
from quickbite.domain.common.ids import RestaurantId, ZoneId
from quickbite.domain.restaurant.entities import Restaurant
from quickbite.infrastructure.db.models.catalog import RestaurantModel
from quickbite.infrastructure.db.session import get_engine


class SqlAlchemyRestaurantRepository(RestaurantRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def get(self, restaurant_id: RestaurantId) -> Restaurant | None:
        with Session(self._engine) as session:
            model = session.get(RestaurantModel, str(restaurant_id))

        if model is None:
            return None

        return Restaurant(
            restaurant_id=RestaurantId(model.id),
            name=model.name,
            location=GeoPoint(lat=model.lat, lon=model.lon),
            zone_id=ZoneId(model.zone) if model.zone else None,
            cuisine=model.cuisine,
        )
