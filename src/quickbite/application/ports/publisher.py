from __future__ import annotations

from typing import Protocol


class EventPublisher(Protocol):
    """Fire-and-forget channel for order lifecycle events (``events:{restaurant_id}``)."""

    def publish(self, channel: str, message: str) -> None: ...
