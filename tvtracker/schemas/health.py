"""Response body for GET /health/."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness plus a database ping. status is "degraded" when the ping fails."""

    status: Literal["ok", "degraded"]
    version: str
    environment: str
    database: Literal["connected", "disconnected"] = Field(
        description="Result of a SELECT 1 against the configured database",
    )
