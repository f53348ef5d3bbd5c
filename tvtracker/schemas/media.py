"""Request/response schemas for media entries (camelCase on the wire)."""

from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

if TYPE_CHECKING:
    from tvtracker.models import MediaEntry

# Range of the INTEGER columns; larger values overflow the driver.
DB_INT_MIN = -(2**31)
DB_INT_MAX = 2**31 - 1


class MediaEntryPayload(BaseModel):
    """
    Body of add/edit requests.

    entryId is ignored on create and required on edit. username may be omitted;
    when present it must name the authenticated user.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    entry_id: int | None = Field(
        default=None, ge=1, le=DB_INT_MAX, description="Entry id (edit only)"
    )
    username: str | None = Field(default=None, max_length=255)
    title: str = Field(..., max_length=255)
    media_type: str = Field(default="tv", description="tv or movie")
    status: str = Field(default="plan_to_watch")
    season: int | None = Field(default=None, ge=DB_INT_MIN, le=DB_INT_MAX)
    episode: int | None = Field(default=None, ge=DB_INT_MIN, le=DB_INT_MAX)
    rating: int | None = Field(default=None, ge=DB_INT_MIN, le=DB_INT_MAX)
    notes: str | None = Field(default=None, max_length=10_000)


class MediaEntryRead(BaseModel):
    """A persisted media entry as returned to clients."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    entry_id: int
    username: str
    title: str
    media_type: str
    status: str
    season: int | None = None
    episode: int | None = None
    rating: int | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_entry(cls, entry: "MediaEntry") -> "MediaEntryRead":
        return cls(
            entry_id=entry.id,
            username=entry.username,
            title=entry.title,
            media_type=entry.media_type,
            status=entry.status,
            season=entry.season,
            episode=entry.episode,
            rating=entry.rating,
            notes=entry.notes,
            created_at=entry.created_at,
            updated_at=entry.updated_at,
        )
