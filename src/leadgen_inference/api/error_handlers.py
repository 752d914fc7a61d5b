"""
FastAPI exception handlers for structured error responses.

Maps domain exceptions to appropriate HTTP status codes and formats.
End users only ever see the friendly categories carried by
OrchestrationError, never raw provider messages.
"""

from datetime import datetime, timezone

import structlog
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from leadgen_inference.retry.exceptions import OrchestrationError
from leadgen_inference.services.exceptions import InvalidRequirementError

logger = structlog.get_logger(__name__)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


async def orchestration_error_handler(request: Request, exc: OrchestrationError) -> JSONResponse:
    """
    Handle exhausted or misconfigured orchestrations.

    Status comes from the failure category: 429 (quota / rate limit),
    503 (overload / misconfiguration), 422 (validation), 500 otherwise.

    Args:
        request: FastAPI request
        exc: OrchestrationError instance

    Returns:
        JSON error response
    """
    logger.error(
        "Orchestration failed",
        category=exc.category.value,
        http_status=exc.http_status,
        attempts=exc.attempts_made,
        last_error=exc.last_error.message if exc.last_error else None,
    )

    return JSONResponse(
        status_code=exc.http_status,
        content={**exc.to_dict(), "timestamp": _timestamp()},
    )


async def invalid_requirement_handler(request: Request, exc: InvalidRequirementError) -> JSONResponse:
    """Handle requirements rejected before any provider call (400)."""
    logger.info("Invalid requirement", reason=exc.message)

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "invalid_requirement",
            "message": exc.message,
            "timestamp": _timestamp(),
        },
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError | PydanticValidationError
) -> JSONResponse:
    """
    Handle invalid request bodies.

    Maps to 400 Bad Request (client error).
    """
    errors = exc.errors()
    logger.warning("Invalid request format", error_count=len(errors))

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "invalid_request",
            "message": "Request validation failed",
            "details": [
                {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
                for error in errors
            ],
            "timestamp": _timestamp(),
        },
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected errors.

    Maps to 500 Internal Server Error.
    """
    logger.exception("Unexpected error", error_type=type(exc).__name__)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "internal_error",
            "message": "An unexpected error occurred",
            "timestamp": _timestamp(),
        },
    )


# Exception handler mapping for FastAPI app.add_exception_handler()
EXCEPTION_HANDLERS = {
    OrchestrationError: orchestration_error_handler,
    InvalidRequirementError: invalid_requirement_handler,
    RequestValidationError: request_validation_error_handler,
    PydanticValidationError: request_validation_error_handler,
    Exception: generic_error_handler,
}
