"""Error Handlers: global exception handlers for the expense tracker API.

Invariants:
    - ExpenseTrackerError → {"error": message} with the error's own status
    - RequestValidationError → 400 with a per-route generic message plus field details
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Three-layer handler: domain (ExpenseTrackerError), validation (Pydantic), catch-all (Exception)
    - Validation message keyed by path so clients of /expenses and /salary keep the
      messages they already match on
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from app.core.errors import ExpenseTrackerError

logger = logging.getLogger(__name__)

VALIDATION_MESSAGES = {
    "/expenses": "Missing required fields",
    "/salary": "Invalid amount provided",
}
DEFAULT_VALIDATION_MESSAGE = "Invalid request data"


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:

    @app.exception_handler(ExpenseTrackerError)
    async def expense_tracker_error_handler(request: Request, exc: ExpenseTrackerError):
        """Handle all domain/infrastructure errors."""
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"{type(exc).__name__}: {exc.message}",
            extra={
                "error_code": exc.code,
                "operation": exc.context.operation,
                "path": request.url.path,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(request.url.path, exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "An unexpected error occurred"},
        )


def _build_validation_error_response(path: str, exc: RequestValidationError) -> dict:
    return {
        "error": VALIDATION_MESSAGES.get(path, DEFAULT_VALIDATION_MESSAGE),
        "details": [
            {
                "field": ".".join(str(loc) for loc in e["loc"]),
                "message": e["msg"],
            }
            for e in exc.errors()
        ],
    }
