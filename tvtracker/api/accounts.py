"""Sign-up and authentication endpoints, plus the session dependency (require_session)."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tvtracker.core.database import get_db
from tvtracker.core.errors import (
    AuthorizationFailure,
    DuplicateUsernameError,
    InfrastructureFailure,
)
from tvtracker.schemas.account import SignUpRequest, TokenResponse
from tvtracker.services.accounts import AccountAuthService

logger = logging.getLogger(__name__)
router = APIRouter()


def get_account_service(db: Annotated[Session, Depends(get_db)]) -> AccountAuthService:
    return AccountAuthService(db)


def require_session(
    accounts: Annotated[AccountAuthService, Depends(get_account_service)],
    username: Annotated[str | None, Query()] = None,
    token: Annotated[str | None, Query()] = None,
) -> str:
    """
    Dependency: require a valid username/token pair and return the username.
    Raises 401 if either is missing or the token is not the current one for username.
    """
    try:
        valid = accounts.is_token_valid(token, username)
    except SQLAlchemyError as e:
        logger.exception("Token validation failed", extra={"username": username})
        raise InfrastructureFailure() from e
    if not valid:
        raise AuthorizationFailure("Invalid token")
    return username


@router.post("/signUp", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def sign_up(
    body: SignUpRequest,
    accounts: Annotated[AccountAuthService, Depends(get_account_service)],
) -> TokenResponse:
    """
    Create an account and return its first session token.
    409 if the username is taken.
    """
    try:
        if accounts.user_account_exists(body):
            raise DuplicateUsernameError()
        token = accounts.create_user_account(body)
    except SQLAlchemyError as e:
        logger.exception("Sign-up failed", extra={"username": body.username})
        raise InfrastructureFailure() from e

    if token is None:
        logger.error("Sign-up produced no token", extra={"username": body.username})
        raise InfrastructureFailure()
    return TokenResponse(token=token)


@router.get("/authenticate", response_model=TokenResponse)
def authenticate(
    accounts: Annotated[AccountAuthService, Depends(get_account_service)],
    username: Annotated[str | None, Query()] = None,
    password: Annotated[str | None, Query()] = None,
) -> TokenResponse:
    """
    Exchange username/password for a new session token.
    Any previously issued token for the user stops working.
    """
    if not username or not password:
        raise AuthorizationFailure("Invalid username or password.")
    try:
        token = accounts.authenticate(username, password)
    except SQLAlchemyError as e:
        logger.exception("Authentication failed", extra={"username": username})
        raise InfrastructureFailure() from e

    if token is None:
        raise AuthorizationFailure("Invalid username or password.")
    return TokenResponse(token=token)
