from __future__ import annotations

from datetime import datetime

from quickbite.application.pricing.zone_pricing import ZonePricing
from quickbite.domain.common.geo import distance_km
from quickbite.domain.customer.entities import Customer
from quickbite.domain.pricing.delivery_fee import DeliveryFeeBreakdown, compute_delivery_fee
from quickbite.domain.pricing.peak import PeakSchedule
from quickbite.domain.restaurant.entities import Restaurant


class DeliveryFeeCalculator:
    def __init__(self, zone_pricing: ZonePricing, peak_schedule: PeakSchedule) -> None:
        self._zone_pricing = zone_pricing
        self._peak_schedule = peak_schedule

    def compute(
        self,
        customer: Customer,
        restaurant: Restaurant,
        placed_at: datetime,
    ) -> DeliveryFeeBreakdown:
        distance = distance_km(customer.location, restaurant.location)
        zone = self._zone_pricing.resolve(customer.zone_id)
        return compute_delivery_fee(
            distance=distance,
            zone=zone,
            peak_multiplier=self._peak_schedule.multiplier_at(placed_at),
        )
