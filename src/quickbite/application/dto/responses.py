from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class OrderItemResponse(BaseModel):
    productId: str
    qty: int
    unitPrice: float


class BreakdownResponse(BaseModel):
    distance: float
    zoneBaseFee: float
    perKmRate: float
    peakMultiplier: float
    deliveryFee: float
    appliedPromos: list[str] = Field(default_factory=list)


class OrderResponse(BaseModel):
    orderId: str
    customerId: str
    restaurantId: str
    status: str
    items: list[OrderItemResponse] = Field(default_factory=list)
    basePrice: float
    deliveryFee: float
    promoDiscount: float
    finalTotal: float
    breakdown: BreakdownResponse
    placedAt: datetime
    createdAt: datetime
    updatedAt: datetime


class LocationResponse(BaseModel):
    lat: float
    lon: float


class CustomerSummaryResponse(BaseModel):
    customerId: str
    name: str
    email: str | None = None


class RestaurantSummaryResponse(BaseModel):
    restaurantId: str
    name: str
    location: LocationResponse


class OrderDetailsResponse(OrderResponse):
    customer: CustomerSummaryResponse | None = None
    restaurant: RestaurantSummaryResponse | None = None
