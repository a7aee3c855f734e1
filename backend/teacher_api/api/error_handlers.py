"""Error Handlers — map every failure to the {"error": {...}} envelope.

Invariants:
    - TeacherPortalError → its own http_status and to_response() body
    - RequestValidationError (bad UUID, bad date, missing body field) → 400 VALIDATION_ERROR
    - Anything else → 500 INTERNAL_ERROR, message never includes the exception text
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from teacher_api.core.errors import TeacherPortalError, ErrorSeverity

logger = logging.getLogger(__name__)

_REQUEST_SOURCES = {"body", "query", "path", "header", "cookie"}


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TeacherPortalError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)


async def handle_domain_error(request: Request, exc: TeacherPortalError) -> JSONResponse:
    log = logger.error if exc.http_status >= 500 else logger.warning
    log(
        f"{type(exc).__name__}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "method": request.method,
            "vinculo_id": exc.context.vinculo_id,
            "course_id": exc.context.course_id,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [_field_error(e) for e in exc.errors()]
    logger.warning(
        f"Validation error on {request.method} {request.url.path}: "
        f"{', '.join(d['field'] for d in details)}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid request data",
                "category": "validation",
                "severity": ErrorSeverity.ERROR.value,
                "details": details,
            },
        },
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}: {exc}",
        exc_info=True,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "category": "internal",
                "severity": ErrorSeverity.CRITICAL.value,
            },
        },
    )


def _field_error(error: dict) -> dict:
    """One pydantic error as {source, field, message, type}."""
    loc = [str(part) for part in error.get("loc", ())]
    source = loc[0] if loc and loc[0] in _REQUEST_SOURCES else None
    field = ".".join(loc[1:] if source else loc)
    return {
        "source": source,
        "field": field or (source or ""),
        "message": error.get("msg", ""),
        "type": error.get("type", ""),
    }
