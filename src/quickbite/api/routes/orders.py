from __future__ import annotations

from fastapi import APIRouter, status
from opentelemetry import trace

from quickbite.api.middleware.request_id import get_request_id
from quickbite.application.dto.requests import CreateOrderRequest
from quickbite.application.dto.responses import OrderDetailsResponse, OrderResponse
from quickbite.application.pricing.delivery_fee import DeliveryFeeCalculator
from quickbite.application.pricing.promotions import PromotionEngine
from quickbite.application.pricing.zone_pricing import ZonePricing
from quickbite.application.use_cases.context import TraceContext
from quickbite.application.use_cases.create_order import CreateOrder
from quickbite.application.use_cases.get_order import GetOrder
from quickbite.domain.common.ids import OrderId
from quickbite.infrastructure.config.peak_rules import get_peak_schedule
from quickbite.infrastructure.db.repositories.customer_repo import SqlAlchemyCustomerRepository
from quickbite.infrastructure.db.repositories.menu_repo import SqlAlchemyMenuItemRepository
from quickbite.infrastructure.db.repositories.order_repo import SqlAlchemyOrderRepository
from quickbite.infrastructure.db.repositories.promotion_repo import SqlAlchemyPromotionRepository
from quickbite.infrastructure.db.repositories.restaurant_repo import (
    SqlAlchemyRestaurantRepository,
)
from quickbite.infrastructure.db.repositories.zone_repo import SqlAlchemyDeliveryZoneRepository
from quickbite.infrastructure.messaging.redis_publisher import RedisEventPublisher

router = APIRouter()


def _current_trace_id() -> str | None:
    span_context = trace.get_current_span().get_span_context()
    if not span_context.is_valid:
        return None
    return format(span_context.trace_id, "032x")


def _create_order_use_case() -> CreateOrder:
    return CreateOrder(
        customer_repository=SqlAlchemyCustomerRepository(),
        restaurant_repository=SqlAlchemyRestaurantRepository(),
        menu_item_repository=SqlAlchemyMenuItemRepository(),
        order_repository=SqlAlchemyOrderRepository(),
        delivery_fee_calculator=DeliveryFeeCalculator(
            zone_pricing=ZonePricing(SqlAlchemyDeliveryZoneRepository()),
            peak_schedule=get_peak_schedule(),
        ),
        promotion_engine=PromotionEngine(SqlAlchemyPromotionRepository()),
        publisher=RedisEventPublisher(),
    )


def _get_order_use_case() -> GetOrder:
    return GetOrder(
        order_repository=SqlAlchemyOrderRepository(),
        customer_repository=SqlAlchemyCustomerRepository(),
        restaurant_repository=SqlAlchemyRestaurantRepository(),
    )


@router.post(
    "/v1/orders",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_order(request_dto: CreateOrderRequest) -> OrderResponse:
    return _create_order_use_case().execute(
        request_dto=request_dto,
        trace_ctx=TraceContext(trace_id=_current_trace_id(), request_id=get_request_id()),
    )


@router.get("/v1/orders/{order_id}", response_model=OrderDetailsResponse)
def get_order(order_id: str) -> OrderDetailsResponse:
    return _get_order_use_case().execute(order_id=OrderId(order_id))
