from __future__ import annotations

from quickbite.application.errors import OrderPricingError
from quickbite.application.ports.repositories import DeliveryZoneRepository
from quickbite.domain.common.ids import ZoneId
from quickbite.domain.pricing.zone import DeliveryZone


class ZonePricing:
    def __init__(self, zone_repository: DeliveryZoneRepository) -> None:
        self._zone_repository = zone_repository

    def resolve(self, zone_id: ZoneId) -> DeliveryZone:
        # An unknown zone is fatal for the order rather than a zero fee.
        zone = self._zone_repository.get(zone_id)
        if zone is None:
            raise OrderPricingError.not_found("DeliveryZone")
        return zone
