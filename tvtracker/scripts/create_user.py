"""
Create a user account and print its session token. Run from project root:
  python -m tvtracker.scripts.create_user USERNAME PASSWORD
"""
import argparse
import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from tvtracker.core.config import get_settings
from tvtracker.core.database import SessionLocal
from tvtracker.core.errors import DuplicateUsernameError
from tvtracker.core.logging_config import setup_logging
from tvtracker.core.security import (
    PASSWORD_MAX_BYTES,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
    password_fits_bcrypt,
)
from tvtracker.schemas.account import SignUpRequest
from tvtracker.services.accounts import AccountAuthService

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a TV Tracker user account.")
    parser.add_argument("username", help=f"Username ({USERNAME_MIN_LEN}-{USERNAME_MAX_LEN} chars)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)

    username = args.username.strip()
    if not (USERNAME_MIN_LEN <= len(username) <= USERNAME_MAX_LEN):
        print("Invalid username length.", file=sys.stderr)
        return 1
    password_ok = PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN
    if not password_ok or not password_fits_bcrypt(args.password):
        print(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters "
            f"and at most {PASSWORD_MAX_BYTES} bytes.",
            file=sys.stderr,
        )
        return 1

    db = SessionLocal()
    try:
        accounts = AccountAuthService(db)
        candidate = SignUpRequest(username=username, password=args.password)
        if accounts.user_account_exists(candidate):
            print(f"User '{username}' already exists.", file=sys.stderr)
            return 1
        token = accounts.create_user_account(candidate)
    except DuplicateUsernameError:
        print(f"User '{username}' already exists.", file=sys.stderr)
        return 1
    except SQLAlchemyError as e:
        logger.exception("Creating user failed: %s", e)
        return 1
    finally:
        db.close()

    print(f"Created user '{username}'.")
    print(f"token: {token}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
