from __future__ import annotations

import json
from datetime import datetime
from typing import Any
from uuid import uuid4

from quickbite.domain.order.entities import Order


def _serialize_event(
    *,
    event_type: str,
    occurred_at: datetime,
    restaurant_id: str,
    payload: dict[str, Any],
    trace_id: str | None,
    request_id: str | None,
) -> str:
    envelope = {
        "event_id": str(uuid4()),
        "event_type": event_type,
        "occurred_at": occurred_at.isoformat(),
        "request_id": request_id,
        "trace_id": trace_id,
        "restaurant_id": restaurant_id,
        "payload": payload,
    }
    return json.dumps(envelope, separators=(",", ":"), ensure_ascii=False)


def serialize_order_event(
    *,
    event_type: str,
    occurred_at: datetime,
    order: Order,
    trace_id: str | None,
    request_id: str | None,
) -> str:
    return _serialize_event(
        event_type=event_type,
        occurred_at=occurred_at,
        restaurant_id=str(order.restaurant_id),
        trace_id=trace_id,
        request_id=request_id,
        payload={
            "orderId": str(order.order_id),
            "customerId": str(order.customer_id),
            "status": order.status.value,
            "basePrice": order.base_price,
            "deliveryFee": order.delivery_fee,
            "promoDiscount": order.promo_discount,
            "finalTotal": order.final_total,
            "appliedPromos": list(order.breakdown.applied_promos),
            "placedAt": order.placed_at.isoformat(),
            "items": [
                {
                    "productId": str(line.product_id),
                    "qty": line.quantity,
                    "unitPrice": line.unit_price,
                }
                for line in order.lines
            ],
        },
    )
