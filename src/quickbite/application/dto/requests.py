from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


def _to_camel(value: str) -> str:
    parts = value.split("_")
    return parts[0] + "".join(part.capitalize() for part in parts[1:])


class CamelBaseModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=_to_camel,
        populate_by_name=True,
    )


class OrderItemRequest(CamelBaseModel):
    product_id: str = Field(min_length=1, max_length=50)
    qty: int = Field(ge=1, le=100)


class CreateOrderRequest(CamelBaseModel):
    customer_id: str = Field(min_length=1, max_length=50)
    restaurant_id: str = Field(min_length=1, max_length=50)
    items: list[OrderItemRequest] = Field(min_length=1)
    placed_at: datetime
