"""ORM model for tracked media entries."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func

from tvtracker.models.base import Base


class MediaEntry(Base):
    """A show or movie tracked by exactly one user account."""

    __tablename__ = "media_entries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(
        String(255),
        ForeignKey("user_accounts.username", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title = Column(String(255), nullable=False)
    media_type = Column(String(16), nullable=False, default="tv")
    status = Column(String(32), nullable=False, default="plan_to_watch")
    season = Column(Integer, nullable=True)
    episode = Column(Integer, nullable=True)
    rating = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
