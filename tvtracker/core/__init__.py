"""Core app configuration, database, security and errors."""

from tvtracker.core.config import get_settings, settings
from tvtracker.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
