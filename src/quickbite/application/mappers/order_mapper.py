from __future__ import annotations

from quickbite.application.dto.responses import (
    BreakdownResponse,
    CustomerSummaryResponse,
    LocationResponse,
    OrderDetailsResponse,
    OrderItemResponse,
    OrderResponse,
    RestaurantSummaryResponse,
)
from quickbite.domain.customer.entities import Customer
from quickbite.domain.order.entities import Order
from quickbite.domain.restaurant.entities import Restaurant


def to_order_response(order: Order) -> OrderResponse:
    return OrderResponse(**_order_fields(order))


def to_order_details_response(
    order: Order,
    customer: Customer | None,
    restaurant: Restaurant | None,
) -> OrderDetailsResponse:
    return OrderDetailsResponse(
        **_order_fields(order),
        customer=(
            CustomerSummaryResponse(
                customerId=str(customer.customer_id),
                name=customer.name,
                email=customer.email,
            )
            if customer is not None
            else None
        ),
        restaurant=(
            RestaurantSummaryResponse(
                restaurantId=str(restaurant.restaurant_id),
                name=restaurant.name,
                location=LocationResponse(
                    lat=restaurant.location.lat,
                    lon=restaurant.location.lon,
                ),
            )
            if restaurant is not None
            else None
        ),
    )


def _order_fields(order: Order) -> dict[str, object]:
    breakdown = order.breakdown
    return {
        "orderId": str(order.order_id),
        "customerId": str(order.customer_id),
        "restaurantId": str(order.restaurant_id),
        "status": order.status.value,
        "items": [
            OrderItemResponse(
                productId=str(line.product_id),
                qty=line.quantity,
                unitPrice=line.unit_price,
            )
            for line in order.lines
        ],
        "basePrice": order.base_price,
        "deliveryFee": order.delivery_fee,
        "promoDiscount": order.promo_discount,
        "finalTotal": order.final_total,
        "breakdown": BreakdownResponse(
            distance=breakdown.distance,
            zoneBaseFee=breakdown.zone_base_fee,
            perKmRate=breakdown.per_km_rate,
            peakMultiplier=breakdown.peak_multiplier,
            deliveryFee=breakdown.delivery_fee,
            appliedPromos=list(breakdown.applied_promos),
        ),
        "placedAt": order.placed_at,
        "createdAt": order.created_at,
        "updatedAt": order.updated_at,
    }
