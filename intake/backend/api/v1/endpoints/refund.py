"""
Refund Page Endpoints.

Mount a refund page, bind input changes, submit it, and start over.
Whether submitting delivers to Telegram is set by forms.yaml.
"""

from fastapi import APIRouter, Depends

from intake.backend.core.config import get_app_config
from intake.backend.core.dependencies import (
    Delivery,
    Hostname,
    Registry,
    RequestId,
    require_refund_page,
)
from intake.backend.forms.pages import RefundPage
from intake.backend.forms.reasons import REASON_LABELS
from intake.backend.forms.state import (
    CUSTOMER_TYPES,
    PAYMENT_METHODS,
    PRODUCT_CATEGORIES,
    PURCHASE_CHANNELS,
    REASON_PREFIX,
)
from intake.backend.schemas.base import ApiResponse, ResponseMetadata
from intake.backend.schemas.page import FieldChange, RefundOptions, RefundPageResponse

router = APIRouter(dependencies=[Depends(require_refund_page)])


def _respond(page: RefundPage, request_id: str) -> ApiResponse[RefundPageResponse]:
    return ApiResponse(
        data=RefundPageResponse.model_validate(page.view()),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/options",
    response_model=ApiResponse[RefundOptions],
    summary="List select and checkbox options",
)
async def get_options() -> ApiResponse[RefundOptions]:
    """Select choices, plus reason checkbox input names mapped to labels."""
    return ApiResponse(
        data=RefundOptions(
            customer_types=list(CUSTOMER_TYPES),
            purchase_channels=list(PURCHASE_CHANNELS),
            product_categories={group: list(items) for group, items in PRODUCT_CATEGORIES.items()},
            payment_methods=list(PAYMENT_METHODS),
            refund_reasons={f"{REASON_PREFIX}{key}": label for key, label in REASON_LABELS},
        )
    )


@router.post(
    "/pages",
    response_model=ApiResponse[RefundPageResponse],
    status_code=201,
    summary="Mount a refund page",
)
async def create_page(registry: Registry, request_id: RequestId) -> ApiResponse[RefundPageResponse]:
    page = registry.add(RefundPage.from_config(get_app_config().forms.refund))
    return _respond(page, request_id)


@router.get(
    "/pages/{page_id}",
    response_model=ApiResponse[RefundPageResponse],
    summary="Get a refund page",
)
async def get_page(page_id: str, registry: Registry, request_id: RequestId) -> ApiResponse[RefundPageResponse]:
    return _respond(registry.get(page_id, RefundPage), request_id)


@router.patch(
    "/pages/{page_id}/fields",
    response_model=ApiResponse[RefundPageResponse],
    summary="Apply an input change",
)
async def change_field(
    page_id: str,
    change: FieldChange,
    registry: Registry,
    request_id: RequestId,
) -> ApiResponse[RefundPageResponse]:
    page = registry.get(page_id, RefundPage)
    page.bind(change.name, change.value, change.checked)
    return _respond(page, request_id)


@router.post(
    "/pages/{page_id}/submit",
    response_model=ApiResponse[RefundPageResponse],
    summary="Submit the refund page",
    description=(
        "No-op while the gate is closed or a submission is in flight. "
        "A failed delivery leaves the page idle; no error is reported."
    ),
)
async def submit_page(
    page_id: str,
    registry: Registry,
    hostname: Hostname,
    delivery: Delivery,
    request_id: RequestId,
) -> ApiResponse[RefundPageResponse]:
    page = registry.get(page_id, RefundPage)
    await page.submit(hostname=hostname, delivery=delivery)
    return _respond(page, request_id)


@router.post(
    "/pages/{page_id}/submit-another",
    response_model=ApiResponse[RefundPageResponse],
    summary="Start a new request",
    description="Clear the form after a successful submission.",
)
async def submit_another(page_id: str, registry: Registry, request_id: RequestId) -> ApiResponse[RefundPageResponse]:
    page = registry.get(page_id, RefundPage)
    page.submit_another()
    return _respond(page, request_id)
