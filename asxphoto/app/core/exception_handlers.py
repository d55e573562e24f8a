"""Exception handlers for converting custom exceptions to HTTP responses."""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from asxphoto.app.core.exceptions import (
    ContestException,
    ContestValidationError,
    QuotaExceededError,
    SelfVoteError,
    AlreadyVotedError,
    UnauthorizedError,
    StaffRequiredError,
    PhotoNotFoundError,
    UserNotFoundError,
    ConflictError,
    RemoteFailureError,
    QuotaUnavailableError,
)

logger = logging.getLogger(__name__)


async def contest_exception_handler(request: Request, exc: ContestException) -> JSONResponse:
    """
    Handle all contest exceptions and convert to appropriate HTTP responses.

    Args:
        request: The incoming request
        exc: The exception that was raised

    Returns:
        JSONResponse with appropriate status code and error details
    """
    headers = None

    # Map exception types to HTTP status codes
    if isinstance(exc, (PhotoNotFoundError, UserNotFoundError)):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, ContestValidationError):
        status_code = 422
    elif isinstance(exc, (QuotaExceededError, AlreadyVotedError, ConflictError)):
        status_code = status.HTTP_409_CONFLICT
    elif isinstance(exc, (SelfVoteError, StaffRequiredError)):
        status_code = status.HTTP_403_FORBIDDEN
    elif isinstance(exc, UnauthorizedError):
        status_code = status.HTTP_401_UNAUTHORIZED
        headers = {"WWW-Authenticate": "Bearer"}
    elif isinstance(exc, QuotaUnavailableError):
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    elif isinstance(exc, RemoteFailureError):
        status_code = status.HTTP_502_BAD_GATEWAY
    else:
        # Generic ContestException
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    if status_code >= 500:
        logger.error(f"[ERROR] {request.method} {request.url.path}: {exc.message}")

    return JSONResponse(
        status_code=status_code,
        headers=headers,
        content={
            "detail": exc.message,
            "type": exc.__class__.__name__,
            **({"info": exc.details} if exc.details else {})
        }
    )


def register_exception_handlers(app):
    """
    Register all custom exception handlers with the FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(ContestException, contest_exception_handler)
