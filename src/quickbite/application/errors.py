from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ErrorKind(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    VALIDATION = "VALIDATION"


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


class OrderPricingError(Exception):
    """Failure raised by the pricing pipeline.

    ``kind`` is a closed set; the API layer switches on it to pick the response
    status. ``entity`` is set for NOT_FOUND, ``field_errors`` for VALIDATION.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        entity: str | None = None,
        field_errors: list[FieldError] | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.entity = entity
        self.field_errors = list(field_errors or [])

    @classmethod
    def not_found(cls, entity: str) -> OrderPricingError:
        return cls(ErrorKind.NOT_FOUND, f"{entity} not found", entity=entity)

    @classmethod
    def validation(cls, message: str, field_errors: list[FieldError]) -> OrderPricingError:
        return cls(ErrorKind.VALIDATION, message, field_errors=field_errors)

    @property
    def details(self) -> dict[str, object]:
        if self.kind == ErrorKind.NOT_FOUND:
            return {"entity": self.entity}
        return {
            "errors": [
                {"field": error.field, "message": error.message} for error in self.field_errors
            ]
        }
