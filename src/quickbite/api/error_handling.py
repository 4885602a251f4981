from __future__ import annotations

import logging
from typing import Any, cast

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from quickbite.api.middleware.request_id import get_request_id
from quickbite.application.errors import ErrorKind, OrderPricingError

logger = logging.getLogger("quickbite.api.errors")

_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.VALIDATION: 400,
}

_NOT_FOUND_CODES: dict[str, str] = {
    "Customer": "CUSTOMER_NOT_FOUND",
    "Restaurant": "RESTAURANT_NOT_FOUND",
    "DeliveryZone": "DELIVERY_ZONE_NOT_FOUND",
    "Order": "ORDER_NOT_FOUND",
}


def _error_response(
    *,
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": details or {},
            },
            "requestId": get_request_id(),
        },
    )


def error_code_for(exc: OrderPricingError) -> str:
    if exc.kind == ErrorKind.NOT_FOUND:
        return _NOT_FOUND_CODES.get(exc.entity or "", "NOT_FOUND")
    return "VALIDATION_FAILED"


async def _order_pricing_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    pricing_exc = cast(OrderPricingError, exc)
    code = error_code_for(pricing_exc)
    logger.warning(
        str(pricing_exc),
        extra={
            "method": request.method,
            "path": request.url.path,
            "error_kind": pricing_exc.kind.value,
            "error_code": code,
        },
    )
    return _error_response(
        status_code=_STATUS_BY_KIND[pricing_exc.kind],
        code=code,
        message=str(pricing_exc),
        details=pricing_exc.details,
    )


async def _http_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    http_exc = cast(StarletteHTTPException, exc)
    message = str(http_exc.detail) if http_exc.detail else "request failed"
    code = "HTTP_ERROR"
    if http_exc.status_code == 404:
        code = "NOT_FOUND"
    elif http_exc.status_code == 400:
        code = "BAD_REQUEST"
    elif http_exc.status_code == 405:
        code = "METHOD_NOT_ALLOWED"
    return _error_response(
        status_code=http_exc.status_code,
        code=code,
        message=message,
    )


async def _validation_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    validation_exc = cast(RequestValidationError, exc)
    errors = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
            "message": error.get("msg", "invalid value"),
        }
        for error in validation_exc.errors()
    ]
    return _error_response(
        status_code=400,
        code="INVALID_REQUEST",
        message="request validation failed",
        details={"errors": errors},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(OrderPricingError, _order_pricing_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
