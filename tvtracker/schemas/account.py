"""Request/response schemas for sign-up and authentication."""

from pydantic import BaseModel, Field, field_validator

from tvtracker.core.security import (
    PASSWORD_MAX_BYTES,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
    password_fits_bcrypt,
)


class SignUpRequest(BaseModel):
    """Credentials for a new account."""

    username: str = Field(
        ...,
        min_length=USERNAME_MIN_LEN,
        max_length=USERNAME_MAX_LEN,
        description="Unique username",
    )
    password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LEN,
        max_length=PASSWORD_MAX_LEN,
        description=f"Password (at most {PASSWORD_MAX_BYTES} bytes as UTF-8)",
    )

    @field_validator("password")
    @classmethod
    def validate_password_bytes(cls, v: str) -> str:
        # Multi-byte characters can pass max_length and still exceed bcrypt's limit.
        if not password_fits_bcrypt(v):
            raise ValueError(f"password must be at most {PASSWORD_MAX_BYTES} bytes as UTF-8")
        return v


class TokenResponse(BaseModel):
    """Session token returned by sign-up and authenticate; resubmit it verbatim."""

    token: str = Field(..., description="Opaque session token")
