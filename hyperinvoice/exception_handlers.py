"""Map service errors to JSON error responses.

Register on a FastAPI app via ``register_exception_handlers(app)``.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from hyperinvoice.services.exceptions import ServiceError, ValidationFailure

logger = logging.getLogger(__name__)


def error_body(status: int, error: str, message: str, **extra: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "status": status,
        "error": error,
        "message": message,
    }
    body.update(extra)
    return body


def _field_name(loc: tuple) -> str:
    # drop the leading "body"/"query"/"path" segment
    parts = [str(part) for part in loc[1:]] or [str(part) for part in loc]
    return ".".join(parts)


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    if isinstance(exc, ValidationFailure):
        logger.warning("Validation failed on %s: %s", request.url.path, exc.field_errors)
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(
                exc.status_code, exc.error, str(exc), fieldErrors=exc.field_errors
            ),
        )
    if exc.status_code >= 500:
        logger.error(
            "%s on %s: %s", type(exc).__name__, request.url.path, exc, exc_info=exc.cause
        )
    else:
        logger.warning("%s on %s: %s", type(exc).__name__, request.url.path, exc)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, exc.error, str(exc)),
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    field_errors: Dict[str, str] = {}
    for error in exc.errors():
        message = str(error.get("msg", "Invalid value"))
        field_errors[_field_name(tuple(error.get("loc", ())))] = message.removeprefix(
            "Value error, "
        )
    logger.warning("Request validation failed on %s: %s", request.url.path, field_errors)
    return JSONResponse(
        status_code=400,
        content=error_body(
            400, "Validation Failed", "Request validation failed", fieldErrors=field_errors
        ),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled exception on %s: %s", request.url.path, exc, exc_info=exc
    )
    return JSONResponse(
        status_code=500,
        content=error_body(500, "Internal Server Error", str(exc)),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the given FastAPI app."""

    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
