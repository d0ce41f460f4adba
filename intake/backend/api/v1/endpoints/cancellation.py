"""
Cancellation Page Endpoints.

Mount a cancellation page, bind input changes, and submit it.
Submitting never calls out; success shows the wait notice.
"""

from fastapi import APIRouter, Depends

from intake.backend.core.config import get_app_config
from intake.backend.core.dependencies import Registry, RequestId, require_cancellation_page
from intake.backend.forms.pages import CancellationPage
from intake.backend.forms.state import CANCELLATION_REASONS, REMOTE_SOFTWARE
from intake.backend.schemas.base import ApiResponse, ResponseMetadata
from intake.backend.schemas.page import CancellationOptions, CancellationPageResponse, FieldChange

router = APIRouter(dependencies=[Depends(require_cancellation_page)])


def _respond(page: CancellationPage, request_id: str) -> ApiResponse[CancellationPageResponse]:
    return ApiResponse(
        data=CancellationPageResponse.model_validate(page.view()),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/options",
    response_model=ApiResponse[CancellationOptions],
    summary="List select options",
)
async def get_options() -> ApiResponse[CancellationOptions]:
    """Choices for the cancellation reason and remote software selects."""
    return ApiResponse(
        data=CancellationOptions(
            cancellation_reasons=list(CANCELLATION_REASONS),
            remote_software=list(REMOTE_SOFTWARE),
        )
    )


@router.post(
    "/pages",
    response_model=ApiResponse[CancellationPageResponse],
    status_code=201,
    summary="Mount a cancellation page",
)
async def create_page(registry: Registry, request_id: RequestId) -> ApiResponse[CancellationPageResponse]:
    page = registry.add(CancellationPage.from_config(get_app_config().forms.cancellation))
    return _respond(page, request_id)


@router.get(
    "/pages/{page_id}",
    response_model=ApiResponse[CancellationPageResponse],
    summary="Get a cancellation page",
)
async def get_page(page_id: str, registry: Registry, request_id: RequestId) -> ApiResponse[CancellationPageResponse]:
    return _respond(registry.get(page_id, CancellationPage), request_id)


@router.patch(
    "/pages/{page_id}/fields",
    response_model=ApiResponse[CancellationPageResponse],
    summary="Apply an input change",
    description="Store the new value. The submit gate is recomputed on every change.",
)
async def change_field(
    page_id: str,
    change: FieldChange,
    registry: Registry,
    request_id: RequestId,
) -> ApiResponse[CancellationPageResponse]:
    page = registry.get(page_id, CancellationPage)
    page.bind(change.name, change.value, change.checked)
    return _respond(page, request_id)


@router.post(
    "/pages/{page_id}/submit",
    response_model=ApiResponse[CancellationPageResponse],
    summary="Submit the cancellation page",
    description="No-op while the gate is closed. On success the wait notice is returned.",
)
async def submit_page(page_id: str, registry: Registry, request_id: RequestId) -> ApiResponse[CancellationPageResponse]:
    page = registry.get(page_id, CancellationPage)
    await page.submit()
    return _respond(page, request_id)
