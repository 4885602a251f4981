from __future__ import annotations

from dataclasses import dataclass

from quickbite.domain.pricing.zone import DeliveryZone


@dataclass(frozen=True)
class DeliveryFeeBreakdown:
    distance: float
    zone_base_fee: float
    per_km_rate: float
    peak_multiplier: float
    delivery_fee: float


def compute_delivery_fee(
    distance: float,
    zone: DeliveryZone,
    peak_multiplier: float,
) -> DeliveryFeeBreakdown:
    raw_fee = zone.base_fee + distance * zone.per_km_rate
    return DeliveryFeeBreakdown(
        distance=distance,
        zone_base_fee=zone.base_fee,
        per_km_rate=zone.per_km_rate,
        peak_multiplier=peak_multiplier,
        delivery_fee=raw_fee * peak_multiplier,
    )
