"""
API Version 1 Router.

Aggregates all v1 endpoint routers.
"""

from fastapi import APIRouter

from intake.backend.api.v1.endpoints import cancellation, refund

router = APIRouter()

router.include_router(cancellation.router, prefix="/cancellation", tags=["cancellation"])
router.include_router(refund.router, prefix="/refund", tags=["refund"])
