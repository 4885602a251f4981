from __future__ import annotations

import logging

from sqlalchemy import Engine, select
from sqlalchemy.orm import Session

from quickbite.application.ports.repositories import PromotionRepository
from quickbite.domain.common.ids import PromotionId, RestaurantId, ZoneId
from quickbite.domain.promotion.entities import Promotion, PromotionKind
from quickbite.infrastructure.db.models.pricing import PromotionModel
from quickbite.infrastructure.db.session import get_engine

logger = logging.getLogger(__name__)


class SqlAlchemyPromotionRepository(PromotionRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def list_active(self) -> list[Promotion]:
        statement = (
            select(PromotionModel)
            .where(PromotionModel.active.is_(True))
            .order_by(PromotionModel.id)
        )
        with Session(self._engine) as session:
            models = list(session.execute(statement).scalars().all())

        promotions: list[Promotion] = []
        for model in models:
            try:
                promotions.append(self._to_domain(model))
            except ValueError:
                logger.warning(
                    "promotion_skipped",
                    exc_info=True,
                    extra={"promotion_id": model.id},
                )
        return promotions

    def _to_domain(self, model: PromotionModel) -> Promotion:
        return Promotion(
            promotion_id=PromotionId(model.id),
            name=model.name,
            kind=PromotionKind(model.type),
            discount=model.discount or 0.0,
            flat=model.flat or 0.0,
            restaurant_id=RestaurantId(model.restaurant_id) if model.restaurant_id else None,
            zone_id=ZoneId(model.zone) if model.zone else None,
            active=model.active,
        )
