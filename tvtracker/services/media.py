"""CRUD for media entries, scoped to the authenticated owner."""

import logging

from sqlalchemy.orm import Session

from tvtracker.models import MediaEntry
from tvtracker.schemas.media import DB_INT_MAX, MediaEntryPayload

logger = logging.getLogger(__name__)

MEDIA_TYPES = frozenset({"tv", "movie"})
ENTRY_STATUSES = frozenset({"watching", "completed", "plan_to_watch", "on_hold", "dropped"})
RATING_MIN = 0
RATING_MAX = 10

# Fields a client may change after creation; id and owner are fixed.
EDITABLE_FIELDS = ("title", "media_type", "status", "season", "episode", "rating", "notes")


class EntryOwnershipError(Exception):
    """Raised when an entry (or a payload's username) belongs to a different user."""

    def __init__(self, entry_id: int | None, username: str) -> None:
        self.entry_id = entry_id
        self.username = username
        super().__init__(f"Entry {entry_id} is not owned by {username}")


def validate_entry(entry: MediaEntryPayload) -> list[str]:
    """Return a list of problems with entry's descriptive fields (empty if valid)."""
    problems: list[str] = []
    if not entry.title or not entry.title.strip():
        problems.append("title must be non-empty")
    if entry.media_type not in MEDIA_TYPES:
        problems.append(f"mediaType must be one of {sorted(MEDIA_TYPES)}")
    if entry.status not in ENTRY_STATUSES:
        problems.append(f"status must be one of {sorted(ENTRY_STATUSES)}")
    for name in ("season", "episode"):
        value = getattr(entry, name)
        if value is not None and not (0 <= value <= DB_INT_MAX):
            problems.append(f"{name} must be between 0 and {DB_INT_MAX}")
    if entry.rating is not None and not (RATING_MIN <= entry.rating <= RATING_MAX):
        problems.append(f"rating must be between {RATING_MIN} and {RATING_MAX}")
    return problems


class MediaEntryStore:
    """
    Media entry persistence. Callers must have validated the session token for
    username before calling any method; ownership of individual entries is
    checked here.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def fetch_media_entries_by_username(self, username: str) -> list[MediaEntry]:
        """All entries owned by username, oldest first (possibly empty)."""
        return (
            self.db.query(MediaEntry)
            .filter(MediaEntry.username == username)
            .order_by(MediaEntry.id)
            .all()
        )

    def fetch_media_entry(self, entry_id: int) -> MediaEntry | None:
        # Ids outside the column range cannot exist and would overflow the driver.
        if not (1 <= entry_id <= DB_INT_MAX):
            return None
        return self.db.get(MediaEntry, entry_id)

    def create_media_entry(self, entry: MediaEntryPayload, username: str) -> MediaEntry | None:
        """
        Persist a new entry for username and return it with its assigned id.
        Returns None if the entry fails validation.
        """
        if entry.username is not None and entry.username != username:
            raise EntryOwnershipError(None, username)
        problems = validate_entry(entry)
        if problems:
            logger.info(
                "Media entry rejected",
                extra={"username": username, "problems": "; ".join(problems)},
            )
            return None
        row = MediaEntry(
            username=username,
            title=entry.title.strip(),
            media_type=entry.media_type,
            status=entry.status,
            season=entry.season,
            episode=entry.episode,
            rating=entry.rating,
            notes=entry.notes,
        )
        self.db.add(row)
        self._commit()
        self.db.refresh(row)
        return row

    def update_media_entry(self, entry: MediaEntryPayload, username: str) -> MediaEntry | None:
        """
        Overwrite the descriptive fields of an existing entry.
        Returns None if entryId is missing or unknown, or if validation fails.
        """
        if entry.entry_id is None:
            return None
        row = self.fetch_media_entry(entry.entry_id)
        if row is None:
            return None
        if row.username != username or (
            entry.username is not None and entry.username != username
        ):
            raise EntryOwnershipError(entry.entry_id, username)
        problems = validate_entry(entry)
        if problems:
            logger.info(
                "Media entry update rejected",
                extra={"entry_id": entry.entry_id, "problems": "; ".join(problems)},
            )
            return None
        for name in EDITABLE_FIELDS:
            setattr(row, name, getattr(entry, name))
        row.title = entry.title.strip()
        self._commit()
        self.db.refresh(row)
        return row

    def delete_media_entry(self, entry_id: int, username: str) -> bool:
        """Delete an entry. False if it does not exist (so repeat deletes are harmless)."""
        row = self.fetch_media_entry(entry_id)
        if row is None:
            return False
        if row.username != username:
            raise EntryOwnershipError(entry_id, username)
        self.db.delete(row)
        self._commit()
        return True

    def _commit(self) -> None:
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
