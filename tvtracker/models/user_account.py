"""ORM model for user accounts (credentials and current session token)."""

from sqlalchemy import Column, Integer, String

from tvtracker.models.base import Base


class UserAccount(Base):
    """
    Account identified by a unique, immutable username.

    token holds the most recently issued session token (None until first issue);
    it is replaced on every successful authentication.
    """

    __tablename__ = "user_accounts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    token = Column(String(512), nullable=True)
