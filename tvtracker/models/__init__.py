"""SQLAlchemy ORM models."""

from tvtracker.models.base import Base
from tvtracker.models.media_entry import MediaEntry
from tvtracker.models.user_account import UserAccount

__all__ = ["Base", "MediaEntry", "UserAccount"]
