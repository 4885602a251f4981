from __future__ import annotations

from quickbite.application.dto.responses import OrderDetailsResponse
from quickbite.application.errors import OrderPricingError
from quickbite.application.mappers.order_mapper import to_order_details_response
from quickbite.application.ports.repositories import (
    CustomerRepository,
    OrderRepository,
    RestaurantRepository,
)
from quickbite.domain.common.ids import OrderId


class GetOrder:
    def __init__(
        self,
        order_repository: OrderRepository,
        customer_repository: CustomerRepository,
        restaurant_repository: RestaurantRepository,
    ) -> None:
        self._order_repository = order_repository
        self._customer_repository = customer_repository
        self._restaurant_repository = restaurant_repository

    def execute(self, order_id: OrderId) -> OrderDetailsResponse:
        order = self._order_repository.get(order_id)
        if order is None:
            raise OrderPricingError.not_found("Order")

        # Display-only references; pricing fields come from the stored order as-is.
        customer = self._customer_repository.get(order.customer_id)
        restaurant = self._restaurant_repository.get(order.restaurant_id)
        return to_order_details_response(order, customer, restaurant)
