"""Exception handlers for the FastAPI app.

Every error response has the shape {"error": CODE, "message": str} plus
"details" for domain errors. Register with register_exception_handlers(app).
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskdeck.core.config import get_settings
from taskdeck.domain.exceptions import TaskdeckException

logger = logging.getLogger(__name__)

# Domain error_code -> HTTP status; unlisted codes are client errors (400).
_ERROR_CODE_STATUS: dict[str, int] = {
    "PERMISSION_DENIED": 403,
    "RESOURCE_NOT_FOUND": 404,
    "MEMBERSHIP_RULE_VIOLATION": 409,
    "DATABASE_NOT_CONFIGURED": 503,
}

# HTTPException status -> error code for framework-level failures.
_HTTP_STATUS_CODE: dict[int, str] = {
    401: "NOT_AUTHENTICATED",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    429: "RATE_LIMITED",
}


def status_for_error_code(error_code: str) -> int:
    """HTTP status for a domain error code."""
    return _ERROR_CODE_STATUS.get(error_code, 400)


def _domain_exception_handler(request: Request, exc: TaskdeckException) -> JSONResponse:
    status = status_for_error_code(exc.error_code)
    if status >= 500:
        logger.error("%s on %s %s: %s", exc.error_code, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=status, content=exc.to_dict())


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """422 with pydantic's error list as details."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": exc.errors(),
        },
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """JSON body for HTTPException; response headers (Retry-After, X-RateLimit-*) pass through."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": _HTTP_STATUS_CODE.get(exc.status_code, "HTTP_ERROR"),
            "message": exc.detail,
        },
        headers=exc.headers,
    )


def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    message: Any = str(exc) if get_settings().debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers above on app.

    TaskdeckException covers every domain error via its error_code.
    """
    app.add_exception_handler(TaskdeckException, _domain_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
