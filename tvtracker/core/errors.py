"""
Error taxonomy for request handling and the FastAPI handlers that render it.

Three kinds, each with its own status:
  AuthorizationFailure  -> 401 (bad token, bad credentials, not the owner)
  ValidationFailure     -> 400, or 409 for a duplicate username
  InfrastructureFailure -> 500 (persistence fault; logged, never detailed to the client)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base for errors that map directly to an HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthorizationFailure(ServiceError):
    """Missing or invalid token, wrong credentials, or an entry owned by someone else."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class ValidationFailure(ServiceError):
    """Malformed or conflicting entity state."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Request rejected"


class DuplicateUsernameError(ValidationFailure):
    """Raised when an account with the same username already exists."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Username already exists"


class InfrastructureFailure(ServiceError):
    """Persistence fault, or a missing result that should have been produced."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"


def _json_error(status_code: int, detail: object) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": jsonable_encoder(detail)})


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    return _json_error(exc.status_code, exc.message)


async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    # Last line of defence; routes normally convert these themselves.
    logger.error(
        "Unhandled database error",
        exc_info=exc,
        extra={"path": request.url.path, "method": request.method},
    )
    return _json_error(
        status.HTTP_500_INTERNAL_SERVER_ERROR, InfrastructureFailure.default_message
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # Anything that escaped the routes still gets a JSON 500 with no detail.
    logger.error(
        "Unhandled error",
        exc_info=exc,
        extra={"path": request.url.path, "method": request.method},
    )
    return _json_error(
        status.HTTP_500_INTERNAL_SERVER_ERROR, InfrastructureFailure.default_message
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return _json_error(status.HTTP_400_BAD_REQUEST, exc.errors())


def register_exception_handlers(app: FastAPI) -> None:
    """Install JSON handlers for the error taxonomy on app."""
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
