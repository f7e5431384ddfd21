"""
Mapping of booking errors to HTTP responses.

Every BookingSystemError becomes {"detail": <message>, "type": <kind>} with a
status code chosen by its kind.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from core.exceptions import (
    BookingSystemError,
    CapacityExceededError,
    ConflictDetectedError,
    ConstraintViolationError,
    NotFoundError,
    SlotUnavailableError,
    StoreError,
    TransientStoreError,
    ValidationError,
)

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES = {
    ValidationError.kind: status.HTTP_422_UNPROCESSABLE_ENTITY,
    NotFoundError.kind: status.HTTP_404_NOT_FOUND,
    SlotUnavailableError.kind: status.HTTP_409_CONFLICT,
    CapacityExceededError.kind: status.HTTP_409_CONFLICT,
    ConflictDetectedError.kind: status.HTTP_409_CONFLICT,
    ConstraintViolationError.kind: status.HTTP_409_CONFLICT,
    TransientStoreError.kind: status.HTTP_503_SERVICE_UNAVAILABLE,
    StoreError.kind: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the booking error handlers to an application."""

    @app.exception_handler(BookingSystemError)
    async def booking_error_handler(request: Request, exc: BookingSystemError):
        status_code = ERROR_STATUS_CODES.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
        if status_code >= 500:
            logger.warning(f"{request.method} {request.url.path} failed: {exc.kind}")
        headers = {"Retry-After": "1"} if exc.retryable else None
        return JSONResponse(status_code=status_code, content=exc.to_dict(), headers=headers)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions globally."""
        logger.exception(f"Unhandled exception: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error", "type": "internal_error"},
        )
