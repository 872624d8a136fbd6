"""
Health check endpoints.

- /health: liveness, always 200 while the process runs
- /health/ready: readiness, 503 when the reservation store is unreachable
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from hotel_booking.api.dependencies import BookingContainer, get_container

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check():
    return {"status": "ok", "service": "hotel-booking"}


@router.get("/health/ready")
async def health_check_ready(container: BookingContainer = Depends(get_container)):
    health_status = {"status": "ready", "checks": {}}
    try:
        await container.ensure_ready()
        await container.check_store()
        health_status["checks"]["store"] = "healthy"
    except Exception as e:
        logger.error("Readiness check: store unhealthy", exc_info=e)
        health_status["status"] = "not_ready"
        health_status["checks"]["store"] = "unhealthy"
        return JSONResponse(status_code=503, content=health_status)
    return health_status
