from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime, timezone
from uuid import uuid4

from quickbite.application.dto.requests import CreateOrderRequest
from quickbite.application.dto.responses import OrderResponse
from quickbite.application.errors import FieldError, OrderPricingError
from quickbite.application.mappers.event_envelope import serialize_order_event
from quickbite.application.mappers.order_mapper import to_order_response
from quickbite.application.metrics.order_pricing import (
    record_order_created,
    record_order_rejected,
)
from quickbite.application.ports.publisher import EventPublisher
from quickbite.application.ports.repositories import (
    CustomerRepository,
    MenuItemRepository,
    OrderRepository,
    RestaurantRepository,
)
from quickbite.application.pricing.delivery_fee import DeliveryFeeCalculator
from quickbite.application.pricing.promotions import PromotionEngine
from quickbite.application.use_cases.context import TraceContext
from quickbite.domain.common.ids import CustomerId, MenuItemId, OrderId, RestaurantId
from quickbite.domain.customer.entities import Customer
from quickbite.domain.menu.entities import MenuItem
from quickbite.domain.order.entities import (
    Order,
    OrderLine,
    base_price_of,
    create_pending_order,
)
from quickbite.domain.restaurant.entities import Restaurant

logger = logging.getLogger(__name__)


class CreateOrder:
    """Price a delivery order and persist it.

    Customer, restaurant and menu items are looked up in parallel. Everything
    after that is sequential, and nothing is written unless every pricing step
    succeeded.
    """

    def __init__(
        self,
        customer_repository: CustomerRepository,
        restaurant_repository: RestaurantRepository,
        menu_item_repository: MenuItemRepository,
        order_repository: OrderRepository,
        delivery_fee_calculator: DeliveryFeeCalculator,
        promotion_engine: PromotionEngine,
        publisher: EventPublisher,
    ) -> None:
        self._customer_repository = customer_repository
        self._restaurant_repository = restaurant_repository
        self._menu_item_repository = menu_item_repository
        self._order_repository = order_repository
        self._delivery_fee_calculator = delivery_fee_calculator
        self._promotion_engine = promotion_engine
        self._publisher = publisher

    def execute(self, request_dto: CreateOrderRequest, trace_ctx: TraceContext) -> OrderResponse:
        try:
            order = self._price_and_persist(request_dto)
        except OrderPricingError as exc:
            record_order_rejected(exc.kind)
            raise

        record_order_created(order)
        self._publish_placed(order, trace_ctx)
        return to_order_response(order)

    def _price_and_persist(self, request_dto: CreateOrderRequest) -> Order:
        customer_id = CustomerId(request_dto.customer_id)
        restaurant_id = RestaurantId(request_dto.restaurant_id)
        requested_ids = [MenuItemId(item.product_id) for item in request_dto.items]
        placed_at = _as_utc(request_dto.placed_at)

        customer, restaurant, menu_items = self._load_entities(
            customer_id=customer_id,
            restaurant_id=restaurant_id,
            item_ids=list(dict.fromkeys(requested_ids)),
        )

        prices = _resolve_prices(requested_ids, menu_items)
        lines = [
            OrderLine(
                product_id=MenuItemId(item.product_id),
                quantity=item.qty,
                unit_price=prices[item.product_id],
            )
            for item in request_dto.items
        ]

        base_price = base_price_of(lines)
        if base_price <= 0:
            raise OrderPricingError.validation(
                "Invalid order total",
                [FieldError(field="items", message="Order total must be greater than 0")],
            )

        delivery = self._delivery_fee_calculator.compute(customer, restaurant, placed_at)
        promotion = self._promotion_engine.apply(
            base_price=base_price,
            customer=customer,
            restaurant=restaurant,
            zone_id=customer.zone_id,
        )

        order = create_pending_order(
            order_id=OrderId(f"ord_{uuid4().hex[:12]}"),
            customer_id=customer.customer_id,
            restaurant_id=restaurant.restaurant_id,
            lines=lines,
            delivery=delivery,
            promo_discount=promotion.discount,
            applied_promos=list(promotion.applied_names),
            placed_at=placed_at,
            now=datetime.now(timezone.utc),
        )
        logger.info(
            "order_priced",
            extra={
                "customer_id": str(customer.customer_id),
                "restaurant_id": str(restaurant.restaurant_id),
                "base_price": order.base_price,
                "delivery_fee": order.delivery_fee,
                "promo_discount": order.promo_discount,
                "final_total": order.final_total,
            },
        )

        persisted = self._order_repository.add(order)
        logger.info("order_created", extra={"order_id": str(persisted.order_id)})
        return persisted

    def _load_entities(
        self,
        customer_id: CustomerId,
        restaurant_id: RestaurantId,
        item_ids: list[MenuItemId],
    ) -> tuple[Customer, Restaurant, list[MenuItem]]:
        executor = ThreadPoolExecutor(max_workers=3, thread_name_prefix="order-lookup")
        try:
            customer_future = executor.submit(self._customer_repository.get, customer_id)
            restaurant_future = executor.submit(self._restaurant_repository.get, restaurant_id)
            items_future = executor.submit(self._menu_item_repository.get_many, item_ids)

            entity_names = {customer_future: "Customer", restaurant_future: "Restaurant"}
            for future in as_completed(entity_names):
                if future.result() is None:
                    raise OrderPricingError.not_found(entity_names[future])

            return customer_future.result(), restaurant_future.result(), items_future.result()
        finally:
            executor.shutdown(wait=True, cancel_futures=True)

    def _publish_placed(self, order: Order, trace_ctx: TraceContext) -> None:
        message = serialize_order_event(
            event_type="order.placed",
            occurred_at=order.created_at,
            order=order,
            trace_id=trace_ctx.trace_id,
            request_id=trace_ctx.request_id,
        )
        try:
            self._publisher.publish(channel=f"events:{order.restaurant_id}", message=message)
        except Exception:
            logger.warning(
                "order_event_publish_failed",
                exc_info=True,
                extra={"order_id": str(order.order_id)},
            )


def _resolve_prices(
    requested_ids: list[MenuItemId],
    menu_items: list[MenuItem],
) -> dict[str, float]:
    prices = {str(item.item_id): item.price for item in menu_items}
    missing_ids = [
        item_id for item_id in dict.fromkeys(requested_ids) if str(item_id) not in prices
    ]
    if missing_ids:
        raise OrderPricingError.validation(
            "Some items not found",
            [
                FieldError(field="items", message=f"Item not found: {item_id}")
                for item_id in missing_ids
            ],
        )
    return prices


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
