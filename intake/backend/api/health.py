"""
Health Check Endpoints.

Endpoints:
- /health: Liveness check (process running)
- /health/ready: Readiness check (configuration and delivery config resource)
"""

from typing import Any

from fastapi import APIRouter, HTTPException

from intake.backend.core.logging import get_logger
from intake.backend.core.utils import utc_now

router = APIRouter()
logger = get_logger(__name__)


def check_configuration() -> dict[str, Any]:
    """Check that every YAML file loads and validates."""
    try:
        from intake.backend.core.config import get_app_config

        app_config = get_app_config()
        return {"status": "healthy", "environment": app_config.application.environment}
    except Exception as e:
        logger.warning("Configuration health check failed", extra={"error": str(e)})
        return {"status": "unhealthy", "error": str(e)}


async def check_delivery_config() -> dict[str, Any]:
    """
    Check the delivery credentials resource.

    Only file sources are read here. An http source points back at this
    service, so it is reported as not checked rather than fetched.
    """
    try:
        from intake.backend.core.config import get_app_config, get_server_base_url
        from intake.backend.services.delivery import build_config_source

        if get_app_config().delivery.source != "file":
            return {"status": "not_checked"}

        document = await build_config_source(get_server_base_url()[0]).load()
        if not isinstance(document, dict):
            return {"status": "unhealthy", "error": "Delivery config is not a JSON object"}
        return {"status": "healthy", "entries": len(document)}
    except Exception as e:
        logger.warning("Delivery config health check failed", extra={"error": str(e)})
        return {"status": "unhealthy", "error": str(e)}


@router.get("/health")
async def health_check() -> dict[str, str]:
    """
    Liveness check.

    Returns 200 if the process is running. No dependency checks.
    """
    return {"status": "healthy"}


@router.get("/health/ready")
async def readiness_check() -> dict[str, Any]:
    """
    Readiness check.

    Returns 503 if configuration or the delivery config file is unusable.
    """
    checks = {
        "configuration": check_configuration(),
        "delivery_config": await check_delivery_config(),
    }

    unhealthy_checks = [
        name for name, check in checks.items()
        if check.get("status") == "unhealthy"
    ]

    if unhealthy_checks:
        logger.warning(
            "Readiness check failed",
            extra={"unhealthy": unhealthy_checks, "checks": checks},
        )
        raise HTTPException(
            status_code=503,
            detail={
                "status": "unhealthy",
                "checks": checks,
                "timestamp": utc_now().isoformat(),
            },
        )

    return {
        "status": "healthy",
        "checks": checks,
        "timestamp": utc_now().isoformat(),
    }
