"""Map the error taxonomy onto HTTP responses: ``{"error": message, "reason": code}``."""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from fitness_tracker.core.errors import (
    AuthenticationError,
    ConflictError,
    FitnessTrackerError,
    InternalError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

STATUS_CODES: dict[type[FitnessTrackerError], int] = {
    ValidationError: 400,
    AuthenticationError: 401,
    NotFoundError: 404,
    ConflictError: 409,
    InternalError: 500,
}


def status_for(exc: FitnessTrackerError) -> int:
    for cls in type(exc).__mro__:
        if cls in STATUS_CODES:
            return STATUS_CODES[cls]
    return 500


async def handle_domain_error(request: Request, exc: FitnessTrackerError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.message, "reason": exc.reason},
        headers=headers,
    )


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies and path parameters are 400, not FastAPI's default 422."""
    return JSONResponse(
        status_code=400,
        content={
            "error": "Invalid request",
            "reason": ValidationError.reason,
            "details": jsonable_encoder(exc.errors(), custom_encoder={Exception: str}),
        },
    )


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "reason": InternalError.reason},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(FitnessTrackerError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(Exception, handle_unexpected)
