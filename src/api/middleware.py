"""
HTTP middleware for request logging.

Logs one line per request with method, path, status code and duration.
Observability only; never alters the response.
"""

import logging
import time
import uuid

from fastapi import FastAPI, Request

logger = logging.getLogger("api.requests")


def register_request_logging(app: FastAPI) -> None:
    """Attach the request logging middleware to an application."""

    @app.middleware("http")
    async def log_requests(request: Request, call_next):  # type: ignore
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.exception(
                f"{request.method} {request.url.path} failed after {duration_ms:.1f}ms [{request_id}]"
            )
            raise

        duration_ms = (time.perf_counter() - start) * 1000
        log_method = logger.warning if response.status_code >= 400 else logger.info
        log_method(
            f"{request.method} {request.url.path} {response.status_code} {duration_ms:.1f}ms [{request_id}]"
        )
        response.headers["X-Request-ID"] = request_id
        return response
