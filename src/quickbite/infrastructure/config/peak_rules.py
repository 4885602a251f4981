from __future__ import annotations

import json
import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from quickbite.domain.pricing.peak import PeakRule, PeakSchedule

logger = logging.getLogger(__name__)

DEFAULT_PEAK_RULES: tuple[dict[str, Any], ...] = (
    {"start": 11, "end": 14, "multiplier": 1.2},
    {"start": 18, "end": 22, "multiplier": 1.5},
)


def parse_peak_rules(raw_rules: Any) -> PeakSchedule:
    if not isinstance(raw_rules, list):
        raise ValueError("peak rules must be a JSON list")
    rules: list[PeakRule] = []
    for raw in raw_rules:
        try:
            rules.append(
                PeakRule(
                    start=int(raw["start"]),
                    end=int(raw["end"]),
                    multiplier=float(raw["multiplier"]),
                )
            )
        except (KeyError, TypeError) as exc:
            raise ValueError(f"invalid peak rule: {raw!r}") from exc
    return PeakSchedule(rules)


def load_peak_schedule(path: str | None) -> PeakSchedule:
    if not path:
        return parse_peak_rules([dict(rule) for rule in DEFAULT_PEAK_RULES])
    raw_rules = json.loads(Path(path).read_text(encoding="utf-8"))
    schedule = parse_peak_rules(raw_rules)
    logger.info("peak_rules_loaded", extra={"path": path, "rule_count": len(schedule.rules)})
    return schedule


@lru_cache(maxsize=1)
def get_peak_schedule() -> PeakSchedule:
    return load_peak_schedule(os.getenv("PEAK_RULES_PATH"))
