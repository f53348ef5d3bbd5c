"""Media entry endpoints. Every route runs behind require_session."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tvtracker.api.accounts import require_session
from tvtracker.core.database import get_db
from tvtracker.core.errors import (
    AuthorizationFailure,
    InfrastructureFailure,
    ValidationFailure,
)
from tvtracker.schemas.media import DB_INT_MAX, MediaEntryPayload, MediaEntryRead
from tvtracker.services.media import EntryOwnershipError, MediaEntryStore

logger = logging.getLogger(__name__)
router = APIRouter()


def get_media_entry_store(db: Annotated[Session, Depends(get_db)]) -> MediaEntryStore:
    return MediaEntryStore(db)


@router.get("/getMediaEntries", response_model=list[MediaEntryRead])
def get_media_entries(
    username: Annotated[str, Depends(require_session)],
    store: Annotated[MediaEntryStore, Depends(get_media_entry_store)],
) -> list[MediaEntryRead]:
    """Return all media entries owned by the authenticated user."""
    try:
        entries = store.fetch_media_entries_by_username(username)
    except SQLAlchemyError as e:
        logger.exception("Listing media entries failed", extra={"username": username})
        raise InfrastructureFailure() from e

    if entries is None:
        raise InfrastructureFailure()
    return [MediaEntryRead.from_entry(entry) for entry in entries]


@router.post(
    "/addMediaEntry",
    response_model=MediaEntryRead,
    status_code=status.HTTP_201_CREATED,
)
def add_media_entry(
    body: MediaEntryPayload,
    username: Annotated[str, Depends(require_session)],
    store: Annotated[MediaEntryStore, Depends(get_media_entry_store)],
) -> MediaEntryRead:
    """Create a media entry for the authenticated user. 400 if the entry is rejected."""
    try:
        entry = store.create_media_entry(body, username)
    except EntryOwnershipError as e:
        raise AuthorizationFailure("Entry does not belong to this user") from e
    except SQLAlchemyError as e:
        logger.exception("Creating media entry failed", extra={"username": username})
        raise InfrastructureFailure() from e

    if entry is None:
        raise ValidationFailure("Media entry rejected")
    logger.info("Media entry created", extra={"username": username, "entry_id": entry.id})
    return MediaEntryRead.from_entry(entry)


@router.put("/editMediaEntry", response_model=MediaEntryRead)
def edit_media_entry(
    body: MediaEntryPayload,
    username: Annotated[str, Depends(require_session)],
    store: Annotated[MediaEntryStore, Depends(get_media_entry_store)],
) -> MediaEntryRead:
    """Update an existing entry. 400 if it does not exist or the update is rejected."""
    try:
        entry = store.update_media_entry(body, username)
    except EntryOwnershipError as e:
        raise AuthorizationFailure("Entry does not belong to this user") from e
    except SQLAlchemyError as e:
        logger.exception(
            "Updating media entry failed",
            extra={"username": username, "entry_id": body.entry_id},
        )
        raise InfrastructureFailure() from e

    if entry is None:
        raise ValidationFailure("Media entry update rejected")
    return MediaEntryRead.from_entry(entry)


@router.delete("/removeMediaEntry")
def remove_media_entry(
    entry_id: Annotated[int, Query(alias="entryId", ge=1, le=DB_INT_MAX)],
    username: Annotated[str, Depends(require_session)],
    store: Annotated[MediaEntryStore, Depends(get_media_entry_store)],
) -> Response:
    """Delete an entry. 400 if it does not exist, including on a repeated delete."""
    try:
        deleted = store.delete_media_entry(entry_id, username)
    except EntryOwnershipError as e:
        raise AuthorizationFailure("Entry does not belong to this user") from e
    except SQLAlchemyError as e:
        logger.exception(
            "Deleting media entry failed",
            extra={"username": username, "entry_id": entry_id},
        )
        raise InfrastructureFailure() from e

    if not deleted:
        raise ValidationFailure("Media entry not found")
    return Response(status_code=status.HTTP_200_OK, media_type="application/json")
