from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TraceContext:
    """Correlation ids copied onto the order.placed envelope. Both are absent off-request."""

    trace_id: str | None
    request_id: str | None

    @classmethod
    def empty(cls) -> TraceContext:
        return cls(trace_id=None, request_id=None)
