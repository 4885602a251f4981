from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Engine, select
from sqlalchemy.orm import Session, selectinload

from quickbite.application.ports.repositories import OrderRepository
from quickbite.domain.common.ids import CustomerId, MenuItemId, OrderId, RestaurantId
from quickbite.domain.order.entities import Order, OrderLine, OrderStatus, PricingBreakdown
from quickbite.infrastructure.db.models.order import OrderItemModel, OrderModel
from quickbite.infrastructure.db.session import get_engine


class SqlAlchemyOrderRepository(OrderRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def add(self, order: Order) -> Order:
        order_model = self._to_model(order)
        with Session(self._engine) as session:
            session.add(order_model)
            session.commit()

        created = self.get(order.order_id)
        if created is None:
            raise RuntimeError("created order not found")
        return created

    def get(self, order_id: OrderId) -> Order | None:
        statement = (
            select(OrderModel)
            .options(selectinload(OrderModel.items))
            .where(OrderModel.id == str(order_id))
            .limit(1)
        )
        with Session(self._engine) as session:
            model = session.execute(statement).scalar_one_or_none()
            if model is None:
                return None
            return self._to_domain(model)

    def _to_model(self, order: Order) -> OrderModel:
        breakdown = order.breakdown
        order_model = OrderModel(
            id=str(order.order_id),
            customer_id=str(order.customer_id),
            restaurant_id=str(order.restaurant_id),
            status=order.status.value,
            base_price=order.base_price,
            delivery_fee=order.delivery_fee,
            promo_discount=order.promo_discount,
            final_total=order.final_total,
            distance_km=breakdown.distance,
            zone_base_fee=breakdown.zone_base_fee,
            per_km_rate=breakdown.per_km_rate,
            peak_multiplier=breakdown.peak_multiplier,
            applied_promos=list(breakdown.applied_promos),
            placed_at=order.placed_at,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )
        order_model.items = [
            OrderItemModel(
                order_id=str(order.order_id),
                position=position,
                product_id=str(line.product_id),
                qty=line.quantity,
                unit_price=line.unit_price,
            )
            for position, line in enumerate(order.lines)
        ]
        return order_model

    def _to_domain(self, model: OrderModel) -> Order:
        lines = [
            OrderLine(
                product_id=MenuItemId(item.product_id),
                quantity=item.qty,
                unit_price=item.unit_price,
            )
            for item in model.items
        ]
        return Order(
            order_id=OrderId(model.id),
            customer_id=CustomerId(model.customer_id),
            restaurant_id=RestaurantId(model.restaurant_id),
            status=OrderStatus(model.status),
            lines=lines,
            base_price=model.base_price,
            delivery_fee=model.delivery_fee,
            promo_discount=model.promo_discount,
            final_total=model.final_total,
            breakdown=PricingBreakdown(
                distance=model.distance_km,
                zone_base_fee=model.zone_base_fee,
                per_km_rate=model.per_km_rate,
                peak_multiplier=model.peak_multiplier,
                delivery_fee=model.delivery_fee,
                applied_promos=list(model.applied_promos or []),
            ),
            placed_at=_aware(model.placed_at),
            created_at=_aware(model.created_at),
            updated_at=_aware(model.updated_at),
        )


def _aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
