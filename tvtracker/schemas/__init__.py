"""Pydantic request/response schemas."""

from tvtracker.schemas.account import SignUpRequest, TokenResponse
from tvtracker.schemas.health import HealthResponse
from tvtracker.schemas.media import MediaEntryPayload, MediaEntryRead

__all__ = [
    "HealthResponse",
    "MediaEntryPayload",
    "MediaEntryRead",
    "SignUpRequest",
    "TokenResponse",
]
