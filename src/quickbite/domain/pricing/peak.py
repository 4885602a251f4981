from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable

NO_SURGE = 1.0


@dataclass(frozen=True)
class PeakRule:
    """Surge multiplier for the UTC hours in ``[start, end)``."""

    start: int
    end: int
    multiplier: float

    def __post_init__(self) -> None:
        if not 0 <= self.start < self.end <= 24:
            raise ValueError("peak rule hours must satisfy 0 <= start < end <= 24")
        if self.multiplier <= 0:
            raise ValueError("multiplier must be > 0")

    def covers(self, hour: int) -> bool:
        return self.start <= hour < self.end


class PeakSchedule:
    def __init__(self, rules: Iterable[PeakRule]) -> None:
        ordered = sorted(rules, key=lambda rule: rule.start)
        for previous, current in zip(ordered, ordered[1:]):
            if current.start < previous.end:
                raise ValueError(
                    f"peak rules overlap: [{previous.start}, {previous.end}) "
                    f"and [{current.start}, {current.end})"
                )
        self._rules = tuple(ordered)

    @property
    def rules(self) -> tuple[PeakRule, ...]:
        return self._rules

    def multiplier_at(self, timestamp: datetime) -> float:
        hour = _utc_hour(timestamp)
        for rule in self._rules:
            if rule.covers(hour):
                return rule.multiplier
        return NO_SURGE


def _utc_hour(timestamp: datetime) -> int:
    if timestamp.tzinfo is None:
        return timestamp.hour
    return timestamp.astimezone(timezone.utc).hour
