"""Error Handlers - global exception handlers for the device API.

Invariants:
    - DeviceApiError → status from the error, message verbatim
    - RequestValidationError → 400 with field-level messages joined into `message`
    - Exception (catch-all) → 500 with a generic message; details only in logs

Design Decisions:
    - Three-layer handler: domain (DeviceApiError), validation (Pydantic), catch-all (Exception)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from device_api.core.errors import DeviceApiError, ErrorSeverity, build_error_body

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.CRITICAL,
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_device_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_device_error_handler(app: FastAPI) -> None:

    @app.exception_handler(DeviceApiError)
    async def device_error_handler(request: Request, exc: DeviceApiError):
        """Handle all device domain/infrastructure errors."""
        logger.log(
            _LOG_LEVELS[exc.severity],
            f"DeviceApiError: {exc.message}",
            extra={
                "error_code": exc.code,
                "device_id": exc.context.device_id,
                "debug_info": exc.context.debug_info,
                "path": request.url.path,
                "method": request.method,
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
            extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=build_error_body(
                status.HTTP_400_BAD_REQUEST, format_validation_errors(exc),
            ),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all - never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path, "method": request.method},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=build_error_body(
                status.HTTP_500_INTERNAL_SERVER_ERROR, "Unexpected server error",
            ),
        )


def format_validation_errors(exc: RequestValidationError) -> str:
    """One `field: message` entry per error, `; `-separated."""
    parts = []
    for e in exc.errors():
        loc = [str(p) for p in e["loc"] if p not in ("body", "query", "path")]
        field = ".".join(loc) or "body"
        parts.append(f"{field}: {e['msg']}")
    return "Validation failed: " + "; ".join(parts)
