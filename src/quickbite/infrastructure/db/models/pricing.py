from __future__ import annotations

from sqlalchemy import Boolean, Float, String
from sqlalchemy.orm import Mapped, mapped_column

from quickbite.infrastructure.db.models.catalog import Base


class DeliveryZoneModel(Base):
    __tablename__ = "delivery_zones"

    zone: Mapped[str] = mapped_column(String(50), primary_key=True)
    base_fee: Mapped[float] = mapped_column(Float, nullable=False)
    per_km_rate: Mapped[float] = mapped_column(Float, nullable=False)


class PromotionModel(Base):
    __tablename__ = "promotions"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    restaurant_id: Mapped[str | None] = mapped_column(String(50), nullable=True)
    zone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    discount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    flat: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
