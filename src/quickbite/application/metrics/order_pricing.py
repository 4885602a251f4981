from __future__ import annotations

from prometheus_client import Counter, Histogram

from quickbite.application.errors import ErrorKind
from quickbite.domain.order.entities import Order

ORDERS_CREATED_TOTAL = Counter(
    "quickbite_orders_created_total",
    "Total number of priced and persisted orders.",
    ["restaurant_id"],
)

ORDER_REJECTIONS_TOTAL = Counter(
    "quickbite_order_rejections_total",
    "Total number of order requests rejected by the pricing pipeline.",
    ["kind"],
)

PROMOTIONS_APPLIED_TOTAL = Counter(
    "quickbite_promotions_applied_total",
    "Total number of promotion applications.",
    ["promotion"],
)

ORDER_FINAL_TOTAL = Histogram(
    "quickbite_order_final_total",
    "Final total charged per order.",
    buckets=(5, 10, 25, 50, 100, 250, 500, 1000, 2500),
)

DELIVERY_FEE = Histogram(
    "quickbite_delivery_fee",
    "Delivery fee charged per order.",
    buckets=(1, 2, 5, 10, 25, 50, 100),
)


def record_order_created(order: Order) -> None:
    ORDERS_CREATED_TOTAL.labels(restaurant_id=str(order.restaurant_id)).inc()
    ORDER_FINAL_TOTAL.observe(order.final_total)
    DELIVERY_FEE.observe(order.delivery_fee)
    for name in order.breakdown.applied_promos:
        PROMOTIONS_APPLIED_TOTAL.labels(promotion=name).inc()


def record_order_rejected(kind: ErrorKind) -> None:
    ORDER_REJECTIONS_TOTAL.labels(kind=kind.value).inc()
