"""
Slot Booking Backend API

A FastAPI application exposing the booking engine for a catalog of doctors,
courts and facilities.

Features:
- Exclusive / capacity-limited bookings on published time slots
- Availability reads with live capacity checks
- Advisory conflict checks
- PostgreSQL (or SQLite for local use) via SQLAlchemy

Run with:
    uvicorn main:create_app --factory
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api import availability, bookings, resources, users
from api.errors import register_exception_handlers
from api.middleware import register_request_logging
from api.responses import ErrorResponse
from core.config import Settings
from core.constants import SERVICE_NAME, SERVICE_VERSION
from core.database import Database
from services import (
    AvailabilityService,
    BookingService,
    ConflictService,
    QueryService,
    ResourceService,
    TimeSlotService,
    UserService,
)
from utils.datetime_utils import format_iso, utc_now

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure root logging from settings."""
    level = getattr(logging, settings.log_level, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )
    # basicConfig is a no-op once the server has installed handlers
    logging.getLogger().setLevel(level)


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Configuration; read from the environment when omitted
        database: Store handle; built from settings when omitted

    Returns:
        Configured FastAPI application with services on app.state
    """
    settings = settings or Settings.from_env()
    configure_logging(settings)
    database = database or Database(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager for startup and shutdown events."""
        logger.info(f"Starting {SERVICE_NAME} ({settings.environment})")
        if not database.ping():
            logger.warning("Database is not reachable at startup")

        yield

        database.dispose()
        logger.info(f"Shutting down {SERVICE_NAME}")

    app = FastAPI(
        title="Slot Booking Backend",
        description="Time slot booking for doctors, courts and facilities",
        version=SERVICE_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    conflict_service = ConflictService(database)
    app.state.settings = settings
    app.state.database = database
    app.state.booking_service = BookingService(database, conflict_service=conflict_service)
    app.state.availability_service = AvailabilityService(database)
    app.state.query_service = QueryService(database)
    app.state.resource_service = ResourceService(database)
    app.state.time_slot_service = TimeSlotService(database)
    app.state.user_service = UserService(database)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    register_request_logging(app)
    register_exception_handlers(app)

    app.include_router(
        resources.router,
        prefix="/api/resources",
        tags=["resources"],
        responses={404: {"model": ErrorResponse, "description": "Resource not found"}},
    )
    app.include_router(
        availability.router,
        prefix="/api/availability",
        tags=["availability"],
        responses={404: {"model": ErrorResponse, "description": "Resource not found"}},
    )
    app.include_router(
        bookings.router,
        prefix="/api/bookings",
        tags=["bookings"],
        responses={
            401: {"description": "Unauthorized"},
            404: {"model": ErrorResponse, "description": "Booking not found"},
            409: {"model": ErrorResponse, "description": "Conflict"},
            503: {"model": ErrorResponse, "description": "Store temporarily unavailable"},
        },
    )
    app.include_router(
        users.router,
        prefix="/api/users",
        tags=["users"],
    )

    @app.get("/", summary="Root endpoint")
    def root() -> dict[str, str]:
        """Get API information."""
        return {
            "message": "Slot Booking Backend API",
            "version": SERVICE_VERSION,
            "status": "running",
        }

    @app.get("/health", summary="Health check")
    def health_check() -> dict[str, str]:
        """Report service and store health."""
        return {
            "status": "ok" if database.ping() else "degraded",
            "service": SERVICE_NAME,
            "version": SERVICE_VERSION,
            "timestamp": format_iso(utc_now()),
        }

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:create_app", factory=True, host="0.0.0.0", port=8080)
