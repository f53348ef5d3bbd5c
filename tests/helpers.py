"""Shared helpers: an isolated in-memory SQLite database per test."""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from tvtracker.models import Base


def make_session_factory() -> tuple[Engine, sessionmaker]:
    """Create a fresh in-memory database with all tables; one connection shared across threads."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return engine, sessionmaker(autocommit=False, autoflush=False, bind=engine)
