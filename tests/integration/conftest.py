"""
Integration Test Fixtures.

The full application runs in-process behind httpx's ASGI transport, against
the real YAML configuration. Requests are addressed to forms.example.com so
the requesting hostname is deterministic. Telegram is never contacted:
gated delivery tests swap in a client backed by httpx.MockTransport.
"""

from collections.abc import AsyncGenerator, Callable
from typing import Any

import httpx
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from intake.backend.core.config import get_app_config
from intake.backend.core.dependencies import get_delivery
from intake.backend.services.delivery import DeliveryClient

HOSTNAME = "forms.example.com"


class InMemoryConfigSource:
    """Delivery config source holding a fixed credentials document."""

    def __init__(self, document: Any) -> None:
        self.document = document

    async def load(self) -> Any:
        return self.document


@pytest.fixture
def app() -> FastAPI:
    from intake.backend.main import create_app

    return create_app()


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client for the application.

    Usage:
        async def test_health_endpoint(client: AsyncClient):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url=f"http://{HOSTNAME}",
    ) as test_client:
        yield test_client


@pytest.fixture
def telegram_requests() -> list[httpx.Request]:
    """Requests the fake Telegram API received."""
    return []


@pytest.fixture
def gated_delivery(
    app: FastAPI,
    telegram_requests: list[httpx.Request],
) -> Callable[..., None]:
    """
    Switch refund pages to gated delivery against a fake Telegram API.

    Call with the status code Telegram should answer and the credentials
    document to resolve from.
    """

    def enable(status_code: int = 200, document: Any = None) -> None:
        get_app_config().forms.refund.delivery_mode = "gated"
        if document is None:
            document = {HOSTNAME: {"botToken": "111:test-token", "chatId": "-1001"}}

        def handler(request: httpx.Request) -> httpx.Response:
            telegram_requests.append(request)
            return httpx.Response(status_code, json={"ok": status_code == 200})

        client = DeliveryClient(
            InMemoryConfigSource(document),
            transport=httpx.MockTransport(handler),
        )
        app.dependency_overrides[get_delivery] = lambda: client

    return enable
