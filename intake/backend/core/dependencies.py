"""
FastAPI Dependencies.

Shared dependencies for request handling.
"""

import uuid
from typing import Annotated

from fastapi import Depends, Header, Request

from intake.backend.core.config import get_app_config, get_server_base_url
from intake.backend.core.exceptions import FeatureDisabledError
from intake.backend.forms.registry import PageRegistry, get_page_registry
from intake.backend.services.delivery import DeliveryClient, get_delivery_client


async def get_request_id(x_request_id: str | None = Header(None)) -> str:
    """
    Extract or generate request ID from headers.

    Used for request tracing and correlation.
    """
    return x_request_id or str(uuid.uuid4())


RequestId = Annotated[str, Depends(get_request_id)]


async def get_hostname(request: Request) -> str:
    """Hostname the page was requested on; keys delivery credentials."""
    return request.url.hostname or ""


Hostname = Annotated[str, Depends(get_hostname)]


async def get_registry() -> PageRegistry:
    return get_page_registry()


Registry = Annotated[PageRegistry, Depends(get_registry)]


async def get_delivery() -> DeliveryClient:
    """
    Delivery client bound to the service's own configured origin.

    The Host header only selects which credentials entry applies; it never
    decides where the credentials document is fetched from.
    """
    return get_delivery_client(get_server_base_url()[0])


Delivery = Annotated[DeliveryClient, Depends(get_delivery)]


async def require_cancellation_page() -> None:
    if not get_app_config().features.page_cancellation_enabled:
        raise FeatureDisabledError("Cancellation page is disabled")


async def require_refund_page() -> None:
    if not get_app_config().features.page_refund_enabled:
        raise FeatureDisabledError("Refund page is disabled")
