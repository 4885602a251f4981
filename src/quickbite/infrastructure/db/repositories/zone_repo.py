from __future__ import annotations

from sqlalchemy import Engine
from sqlalchemy.orm import Session

from quickbite.application.ports.repositories import DeliveryZoneRepository
from quickbite.domain.common.ids import ZoneId
from quickbite.domain.pricing.zone import DeliveryZone
from quickbite.infrastructure.db.models.pricing import DeliveryZoneModel
from quickbite.infrastructure.db.session import get_engine


class SqlAlchemyDeliveryZoneRepository(DeliveryZoneRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def get(self, zone_id: ZoneId) -> DeliveryZone | None:
        with Session(self._engine) as session:
            model = session.get(DeliveryZoneModel, str(zone_id))

        if model is None:
            return None

        return DeliveryZone(
            zone_id=ZoneId(model.zone),
            base_fee=model.base_fee,
            per_km_rate=model.per_km_rate,
        )
