"""Error Handlers — turn exceptions into the Keepsake JSON error envelope.

Invariants:
    - KeepsakeError uses its own status and to_response() body
    - Request validation failures are 400 with one detail per offending field
    - Anything else is a 500 whose body never echoes the exception text
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from keepsake.core.errors import ErrorCategory, ErrorSeverity, KeepsakeError

logger = logging.getLogger(__name__)


async def handle_keepsake_error(request: Request, exc: KeepsakeError) -> JSONResponse:
    level = logging.WARNING if exc.http_status < 500 else logging.ERROR
    logger.log(
        level, exc.message,
        extra={"error_code": exc.code, "path": request.url.path},
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [_field_detail(e) for e in exc.errors()]
    logger.warning(
        "Rejected request: %s",
        ", ".join(d["field"] for d in details) or "body",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    body = _envelope(
        "VALIDATION_ERROR", "Invalid request data",
        ErrorCategory.VALIDATION, ErrorSeverity.ERROR,
    )
    body["error"]["details"] = details
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled %s", type(exc).__name__,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            "INTERNAL_ERROR", "An unexpected error occurred",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
        ),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(KeepsakeError, handle_keepsake_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)


def _envelope(
    code: str, message: str, category: ErrorCategory, severity: ErrorSeverity,
) -> dict:
    return {
        "error": {
            "code": code,
            "message": message,
            "category": category.value,
            "severity": severity.value,
        },
    }


def _field_detail(error: dict) -> dict:
    # Drop the "query"/"body"/"path" prefix FastAPI puts on loc
    loc = [str(part) for part in error.get("loc", ())]
    if len(loc) > 1 and loc[0] in ("query", "body", "path"):
        loc = loc[1:]
    return {
        "field": ".".join(loc),
        "message": error.get("msg", ""),
        "type": error.get("type", ""),
    }
