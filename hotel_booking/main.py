import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from hotel_booking.api.dependencies import get_container
from hotel_booking.api.routers.admin import router as admin_router
from hotel_booking.api.routers.front_desk import router as front_desk_router
from hotel_booking.api.routers.health import router as health_router
from hotel_booking.api.routers.reservations import router as reservations_router
from hotel_booking.api.routers.rooms import router as rooms_router
from hotel_booking.config import get_settings

logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = get_container()
    await container.ensure_ready()
    yield
    await container.close()


app = FastAPI(
    title="Hotel Booking API",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler to prevent stack trace exposure to clients.
    All unhandled exceptions are logged internally and return a generic error message.
    """
    error_id = str(uuid.uuid4())

    logger.error(
        "Unhandled exception occurred",
        exc_info=exc,
        extra={
            "error_id": error_id,
            "path": request.url.path,
            "method": request.method,
            "client_host": request.client.host if request.client else None,
        },
    )

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "error_id": error_id,
            "message": "An unexpected error occurred. Please contact support with the error_id if the issue persists.",
        },
    )


app.include_router(health_router, tags=["Health"])
app.include_router(rooms_router, prefix="/api/v1", tags=["Rooms"])
app.include_router(reservations_router, prefix="/api/v1", tags=["Reservations"])
app.include_router(front_desk_router, prefix="/api/v1", tags=["Front Desk"])
app.include_router(admin_router, prefix="/api/v1", tags=["Admin"])
