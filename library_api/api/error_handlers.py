"""Error Handlers: global exception handlers producing the failure envelope.

Invariants:
    - LibraryError -> its own status and field map
    - RequestValidationError -> 400, one entry per violated field
    - Exception (catch-all) -> 500, exception name and message under "general"
    - No exception escapes a request without an envelope response

Design Decisions:
    - Three-layer handler: domain (LibraryError), validation (pydantic), catch-all
    - Registered from main.py via register_error_handlers(app)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from library_api.core.errors import (
    LibraryError, ValidationFailedError, internal_error_response,
)
from library_api.core.validation import violations_from_errors

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_library_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_library_error_handler(app: FastAPI) -> None:

    @app.exception_handler(LibraryError)
    async def library_error_handler(request: Request, exc: LibraryError):
        """Handle domain and infrastructure errors."""
        extra = {
            "error_code": exc.code,
            "path": request.url.path,
            "status_code": exc.http_status,
        }
        if exc.http_status >= 500:
            logger.error(f"LibraryError: {exc.message}", extra=extra, exc_info=exc)
        else:
            logger.warning(f"LibraryError: {exc.message}", extra=extra)
        return JSONResponse(
            status_code=exc.http_status,
            content=jsonable_encoder(exc.to_response()),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle request validation errors with per-field detail."""
        error = ValidationFailedError(violations_from_errors(exc.errors()))
        logger.warning(
            f"Validation error on {request.url.path}: {error.message}",
            extra={"error_code": error.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=jsonable_encoder(error.to_response()),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: unexpected failures become a 500 envelope."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            extra={"path": request.url.path, "status_code": 500},
            exc_info=exc,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=jsonable_encoder(internal_error_response(exc)),
        )
