"""
==============================================================================
Health Check Endpoints
==============================================================================

HealthCheck always reports SERVING; streaming Watch is not supported and
clients are expected to poll HealthCheck instead.

==============================================================================
"""

from fastapi import APIRouter

from product_catalog.core import exceptions
from product_catalog.schemas.catalog import HealthCheckResponse


router = APIRouter(prefix="/health", tags=["Health"])


@router.get("", response_model=HealthCheckResponse)
async def health_check():
    """HealthCheck: report the serving status."""
    return HealthCheckResponse()


@router.get("/watch")
async def health_watch():
    """HealthWatch: not supported, poll HealthCheck instead."""
    raise exceptions.not_implemented("health check via Watch")
