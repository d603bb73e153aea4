"""Error Handlers — global exception handlers for the weights API.

Invariants:
    - WeightLogError → its own status and to_response() envelope
    - RequestValidationError → 400, message of the first failing field plus details
    - Exception (catch-all) → 500, never leaks internal details
    - Every body has the same {"error": {code, message, category, severity}} shape

Design Decisions:
    - Client errors (4xx) log at WARNING, server errors at ERROR with the path,
      so a burst of bad requests does not look like an outage
    - One envelope builder shared by the non-domain handlers
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from weightlog.core.errors import ErrorCategory, ErrorSeverity, WeightLogError

logger = logging.getLogger(__name__)

GENERIC_MESSAGE = "An unexpected error occurred"


def _envelope(
    code: str, message: str, category: ErrorCategory, severity: ErrorSeverity,
    **extra,
) -> dict:
    return {
        "error": {
            "code": code,
            "message": message,
            "category": category.value,
            "severity": severity.value,
            **extra,
        },
    }


def _field_details(exc: RequestValidationError) -> list[dict]:
    return [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]


async def handle_weight_log_error(
    request: Request, exc: WeightLogError,
) -> JSONResponse:
    log = logger.error if exc.http_status >= 500 else logger.warning
    log(
        f"{exc.code} on {request.method} {request.url.path}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "operation": exc.context.operation,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = _field_details(exc)
    logger.warning(
        f"Rejected body on {request.method} {request.url.path}: {details}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    message = details[0]["message"] if details else "Invalid request data"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(
            "VALIDATION_ERROR", message,
            ErrorCategory.VALIDATION, ErrorSeverity.ERROR,
            details=details,
        ),
    )


async def handle_unexpected_error(
    request: Request, exc: Exception,
) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}",
        exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            "INTERNAL_ERROR", GENERIC_MESSAGE,
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
        ),
    )


_HANDLERS = (
    (WeightLogError, handle_weight_log_error),
    (RequestValidationError, handle_request_validation_error),
    (Exception, handle_unexpected_error),
)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    for exc_class, handler in _HANDLERS:
        app.add_exception_handler(exc_class, handler)
