from __future__ import annotations

from typing import Iterable

from sqlalchemy import Engine, select
from sqlalchemy.orm import Session

from quickbite.application.ports.repositories import MenuItemRepository
from quickbite.domain.common.ids import MenuItemId, RestaurantId
from quickbite.domain.menu.entities import MenuItem
from quickbite.infrastructure.db.models.catalog import MenuItemModel
from quickbite.infrastructure.db.session import get_engine


class SqlAlchemyMenuItemRepository(MenuItemRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def get_many(self, item_ids: Iterable[MenuItemId]) -> list[MenuItem]:
        ids = sorted({str(item_id) for item_id in item_ids})
        if not ids:
            return []

        statement = select(MenuItemModel).where(MenuItemModel.id.in_(ids))
        with Session(self._engine) as session:
            models = list(session.execute(statement).scalars().all())

        return [
            MenuItem(
                item_id=MenuItemId(model.id),
                name=model.name,
                price=model.price,
                restaurant_id=RestaurantId(model.restaurant_id) if model.restaurant_id else None,
            )
            for model in models
        ]
