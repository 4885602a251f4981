from __future__ import annotations

from dataclasses import dataclass

from quickbite.domain.common.ids import ZoneId


@dataclass(frozen=True)
class DeliveryZone:
    zone_id: ZoneId
    base_fee: float
    per_km_rate: float

    def __post_init__(self) -> None:
        if self.base_fee < 0:
            raise ValueError("base_fee must be >= 0")
        if self.per_km_rate < 0:
            raise ValueError("per_km_rate must be >= 0")
