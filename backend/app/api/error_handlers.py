"""Error Handlers — global exception handlers for the registry API.

Invariants:
    - EmployeeRegistryError -> {"error": <message>} with the error's own status
    - RequestValidationError (malformed JSON, wrong types) -> 400 {"error": ...}
    - HTTPException (unknown route, wrong method) -> its status with {"error": detail}
    - Exception (catch-all) -> 500, never leaks internal details
    - Domain errors are logged here at INFO only; store failures already carry their
      ERROR record and traceback from the layer that raised DatabaseError

Design Decisions:
    - Four handlers: domain (EmployeeRegistryError), validation (Pydantic),
      framework HTTP errors, catch-all
    - Extracted from main.py to keep the entry point small
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.errors import EmployeeRegistryError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_registry_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_registry_error_handler(app: FastAPI) -> None:
    """Register domain/infrastructure error handler."""

    @app.exception_handler(EmployeeRegistryError)
    async def registry_error_handler(request: Request, exc: EmployeeRegistryError):
        extra = {
            "error_code": exc.code,
            "path": request.url.path,
            "emp_id": exc.context.emp_id,
        }
        logger.info(
            f"Request failed with {exc.http_status}: {exc.message}", extra=extra,
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.info(
            f"Malformed request on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request data"},
        )


def _register_http_error_handler(app: FastAPI) -> None:
    """Register framework HTTP error handler (unknown route, wrong method)."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        logger.info(
            f"HTTP {exc.status_code} on {request.method} {request.url.path}",
            extra={"path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all; never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": INTERNAL_ERROR_MESSAGE},
        )
