"""Health endpoint: reports app version, environment and whether the database answers."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from tvtracker.core.config import settings
from tvtracker.core.database import check_db_connected, get_db
from tvtracker.schemas.health import HealthResponse

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get(
    "/",
    response_model=HealthResponse,
    responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"model": HealthResponse}},
)
def get_health(
    request: Request,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
) -> HealthResponse:
    """200 when the database answers, 503 (same body, status "degraded") when it does not."""
    if check_db_connected(db):
        return HealthResponse(
            status="ok",
            version=request.app.version,
            environment=settings.APP_ENV,
            database="connected",
        )
    logger.warning("Health check: database unreachable")
    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return HealthResponse(
        status="degraded",
        version=request.app.version,
        environment=settings.APP_ENV,
        database="disconnected",
    )
