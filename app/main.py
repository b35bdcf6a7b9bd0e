"""
FastAPI application for barbershop booking

Public booking page API, owner dashboard API and agent integration API
"""
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute
from starlette.responses import JSONResponse

from app.config.settings import get_settings
from app.core.exceptions import (
    AppointmentNotFoundError,
    BarberNotFoundError,
    BookingError,
    InvalidStatusError,
    ScheduleValidationError,
    SlotUnavailableError,
)
from app.core.middleware import correlation_id_middleware, request_logging_middleware
from app.core.monitoring import health_router
from app.api.v1.router import api_v1_router
from app.api.middleware.rate_limit_middleware import RateLimitMiddleware
from app.utils.my_logging import setup_logging

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    # Startup
    setup_logging()
    routes = [route for route in app.routes if isinstance(route, APIRoute)]
    logger.info(f"{settings.APP_NAME} API starting up with {len(routes)} routes "
                f"(booking lock backend: {settings.BOOKING_LOCK_BACKEND})")

    yield

    # Shutdown
    logger.info(f"{settings.APP_NAME} API shutting down")


def _error(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain errors raised by the service layer to HTTP responses"""

    @app.exception_handler(SlotUnavailableError)
    async def slot_unavailable_handler(request: Request, exc: SlotUnavailableError):
        return _error(409, exc)

    @app.exception_handler(BarberNotFoundError)
    async def barber_not_found_handler(request: Request, exc: BarberNotFoundError):
        return _error(404, exc)

    @app.exception_handler(AppointmentNotFoundError)
    async def appointment_not_found_handler(request: Request, exc: AppointmentNotFoundError):
        return _error(404, exc)

    @app.exception_handler(ScheduleValidationError)
    async def schedule_validation_handler(request: Request, exc: ScheduleValidationError):
        return _error(422, exc)

    @app.exception_handler(InvalidStatusError)
    async def invalid_status_handler(request: Request, exc: InvalidStatusError):
        return _error(400, exc)

    # ServiceNotFoundError and any other booking failure
    @app.exception_handler(BookingError)
    async def booking_error_handler(request: Request, exc: BookingError):
        return _error(400, exc)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""

    app = FastAPI(
        title="Barbershop Booking API",
        description="Availability, conflict-checked booking and schedule management for barbers",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    app.add_middleware(
        RateLimitMiddleware,
        requests_per_minute=settings.PUBLIC_BOOKING_RATE_LIMIT_PER_MINUTE
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "PUT"],
        allow_headers=["*"],
    )

    # Add custom middleware
    app.middleware("http")(request_logging_middleware)
    app.middleware("http")(correlation_id_middleware)

    register_exception_handlers(app)

    # Include routers
    app.include_router(health_router, prefix="/health", tags=["monitoring"])
    app.include_router(api_v1_router, prefix="/api/v1", tags=["api"])

    @app.get("/")
    async def root():
        return {
            "service": "Barbershop Booking API",
            "version": "0.1.0",
            "status": "running",
            "endpoints": {
                "api": "/api/v1/",
                "health": "/health",
                "docs": "/docs" if settings.DEBUG else "disabled"
            }
        }

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="info"
    )
