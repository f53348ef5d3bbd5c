"""Account identity and session token lifecycle."""

import logging

import jwt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tvtracker.core.errors import DuplicateUsernameError
from tvtracker.core.security import (
    burn_password_check,
    create_session_token,
    decode_session_token,
    hash_password,
    password_fits_bcrypt,
    tokens_match,
    verify_password,
)
from tvtracker.models import UserAccount
from tvtracker.schemas.account import SignUpRequest

logger = logging.getLogger(__name__)


class AccountAuthService:
    """
    Creates accounts, verifies credentials, and issues/validates session tokens.

    Persistence faults surface as sqlalchemy.exc.SQLAlchemyError; modeled negatives
    (no such user, wrong password, token mismatch) are None/False. Callers must
    keep the two apart.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def user_account_exists(self, candidate: SignUpRequest) -> bool:
        """True if an account with candidate's username already exists."""
        return self.fetch_user_account(candidate.username) is not None

    def create_user_account(self, candidate: SignUpRequest) -> str | None:
        """
        Insert a new account with a fresh token and return that token.

        The insert relies on the unique index on username, so a concurrent
        sign-up for the same name raises DuplicateUsernameError instead of
        creating a second account.
        """
        token = create_session_token(candidate.username)
        account = UserAccount(
            username=candidate.username,
            password_hash=hash_password(candidate.password),
            token=token,
        )
        self.db.add(account)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateUsernameError() from e
        except Exception:
            self.db.rollback()
            raise
        logger.info("User account created", extra={"username": candidate.username})
        return account.token

    def fetch_user_account(self, username: str) -> UserAccount | None:
        """Look up an account by username; None if absent."""
        return self.db.query(UserAccount).filter(UserAccount.username == username).first()

    def update_user_token(self, account: UserAccount) -> str | None:
        """Issue and persist a new token for account; the previous token stops working."""
        account.token = create_session_token(account.username)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return account.token

    def authenticate(self, username: str, password: str) -> str | None:
        """
        Verify username/password and rotate the session token.

        Returns the new token, or None for an unknown user or wrong password
        (indistinguishable to the caller). Passwords longer than bcrypt accepts
        are rejected outright; they could never have been stored.
        """
        if not password_fits_bcrypt(password):
            return None
        account = self.fetch_user_account(username)
        if account is None:
            burn_password_check(password)
            return None
        if not verify_password(password, account.password_hash):
            logger.info("Authentication rejected", extra={"username": username})
            return None
        return self.update_user_token(account)

    def is_token_valid(self, token: str | None, username: str | None) -> bool:
        """True iff token is the one most recently issued to username."""
        if not token or not username:
            return False
        try:
            claims = decode_session_token(token)
        except jwt.PyJWTError:
            return False
        if claims.get("sub") != username:
            return False
        account = self.fetch_user_account(username)
        if account is None or account.token is None:
            return False
        return tokens_match(token, account.token)
