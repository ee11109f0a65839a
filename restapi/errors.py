"""Exception handlers mapping failures to HTTP responses."""

from typing import Any, Dict, List

import fastapi
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from components.core.logging_setup import get_logger

logger = get_logger("finance_tracker.restapi")


def _field_errors(exc: RequestValidationError) -> List[Dict[str, Any]]:
    """Machine readable field errors without non-serializable context."""
    return [
        {"loc": [str(part) for part in error.get("loc", ())], "msg": error.get("msg", ""), "type": error.get("type", "")}
        for error in exc.errors()
    ]


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Return 400 for invalid input; path parameters that fail to parse are malformed requests."""
    errors = _field_errors(exc)
    malformed = bool(errors) and all(error["loc"][:1] == ["path"] for error in errors)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": "Malformed request" if malformed else "Validation error",
            "errors": errors,
        },
    )


async def unexpected_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected faults and hide their details from the client."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def init_error_handlers(app: fastapi.FastAPI) -> None:
    """Register exception handlers on the application."""
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unexpected_exception_handler)
