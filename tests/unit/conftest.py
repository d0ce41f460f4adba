"""
Unit Test Fixtures.

Fixtures for unit tests - outbound HTTP is replaced by httpx.MockTransport
and the delivery config resource by an in-memory source.
"""

from collections.abc import Callable
from typing import Any

import httpx
import pytest


class StaticConfigSource:
    """Delivery config source that returns a fixed document."""

    def __init__(self, document: Any) -> None:
        self.document = document
        self.loads = 0

    async def load(self) -> Any:
        self.loads += 1
        return self.document


class FailingConfigSource:
    """Delivery config source whose load always fails."""

    def __init__(self, error: Exception) -> None:
        self.error = error

    async def load(self) -> Any:
        raise self.error


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it handled."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


@pytest.fixture
def telegram_document() -> dict[str, Any]:
    """A credentials document with one host entry and a default."""
    return {
        "forms.example.com": {"botToken": "111:host-token", "chatId": "-1001"},
        "default": {"botToken": "222:default-token", "chatId": "-2002"},
    }


@pytest.fixture
def ok_transport() -> RecordingTransport:
    """Transport answering every request with Telegram's success shape."""
    return RecordingTransport(
        lambda request: httpx.Response(200, json={"ok": True, "result": {"message_id": 1}})
    )


@pytest.fixture
def make_transport() -> Callable[..., RecordingTransport]:
    """Build a recording transport with a fixed status code."""

    def factory(status_code: int = 200) -> RecordingTransport:
        return RecordingTransport(lambda request: httpx.Response(status_code, json={}))

    return factory


@pytest.fixture
def static_source() -> type[StaticConfigSource]:
    """Provide StaticConfigSource for building in-memory config sources."""
    return StaticConfigSource


@pytest.fixture
def failing_source() -> type[FailingConfigSource]:
    """Provide FailingConfigSource for simulating unreachable config."""
    return FailingConfigSource
