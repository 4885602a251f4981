from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Iterator

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

import quickbite.api.routes.orders as orders_route
from quickbite.infrastructure.config import peak_rules
from quickbite.infrastructure.db import session as db_session
from quickbite.tools.seed import seed


class RecordingPublisher:
    messages: list[tuple[str, str]] = []

    def __init__(self, timeout_seconds: float = 1.0) -> None:
        self._timeout_seconds = timeout_seconds

    def publish(self, channel: str, message: str) -> None:
        self.messages.append((channel, message))


@pytest.fixture(scope="session", autouse=True)
def integration_environment(tmp_path_factory: pytest.TempPathFactory) -> Iterator[None]:
    database_path = tmp_path_factory.mktemp("db") / "quickbite.sqlite3"

    os.environ["DATABASE_URL"] = f"sqlite:///{database_path}"
    os.environ["APP_ENV"] = "test"
    os.environ.pop("PEAK_RULES_PATH", None)
    os.environ.setdefault("OTEL_SERVICE_NAME", "quickbite-api-test")
    os.environ.setdefault("OTEL_EXPORTER_OTLP_ENDPOINT", "")

    db_session._build_engine.cache_clear()
    peak_rules.get_peak_schedule.cache_clear()

    seed(db_session.get_engine())
    yield
    db_session.get_engine().dispose()
    db_session._build_engine.cache_clear()


@pytest.fixture(autouse=True)
def published(monkeypatch) -> Iterator[list[tuple[str, str]]]:
    RecordingPublisher.messages = []
    monkeypatch.setattr(orders_route, "RedisEventPublisher", RecordingPublisher)
    yield RecordingPublisher.messages
