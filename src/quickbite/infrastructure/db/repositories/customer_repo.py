from __future__ import annotations

from sqlalchemy import Engine
from sqlalchemy.orm import Session

from quickbite.application.ports.repositories import CustomerRepository
from quickbite.domain.common.geo import GeoPoint
from quickbite.domain.common.ids import CustomerId, ZoneId
from quickbite.domain.customer.entities import Customer
from quickbite.infrastructure.db.models.catalog import CustomerModel
from quickbite.infrastructure.db.session import get_engine


class SqlAlchemyCustomerRepository(CustomerRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def get(self, customer_id: CustomerId) -> Customer | None:
        with Session(self._engine) as session:
            model = session.get(CustomerModel, str(customer_id))

        if model is None:
            return None

        return Customer(
            customer_id=CustomerId(model.id),
            name=model.name,
            email=model.email,
            location=GeoPoint(lat=model.lat, lon=model.lon),
            zone_id=ZoneId(model.zone),
            first_order_completed=model.first_order_completed,
        )
