"""Error Handlers: global exception handlers for the Fever API.

Invariants:
    - FeverError -> structured JSON with its own code, category, and http_status
    - Exception (catch-all) -> 500 INTERNAL_ERROR, never leaks internal details
    - Authentication failures and unknown marks never reach these handlers:
      they are a 200 with auth=0 or a bare envelope

Design Decisions:
    - Two layers only: Fever routes read raw parameters through Request, so there is
      no FastAPI request validation to translate
    - Kept out of main.py (ADR: import fan-out < 10)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from fever_api.core.errors import ErrorCategory, ErrorSeverity, FeverError

logger = logging.getLogger(__name__)

_INTERNAL_ERROR_BODY = {
    "error": {
        "code": "INTERNAL_ERROR",
        "message": "An unexpected error occurred",
        "category": ErrorCategory.INTERNAL.value,
        "severity": ErrorSeverity.CRITICAL.value,
    },
}


def register_error_handlers(app: FastAPI) -> None:
    """Register the Fever error handler and the catch-all on the app."""
    app.add_exception_handler(FeverError, fever_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


async def fever_error_handler(request: Request, exc: FeverError) -> JSONResponse:
    """Collaborator failures the infrastructure already classified."""
    log = logger.critical if exc.severity is ErrorSeverity.CRITICAL else logger.error
    log(
        f"{exc.code} on {request.method} {request.url.path}: {exc.message}",
        extra={"error_code": exc.code, "path": request.url.path, "method": request.method},
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Anything else: logged with traceback, answered without details."""
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}",
        exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path, "method": request.method},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=_INTERNAL_ERROR_BODY,
    )
