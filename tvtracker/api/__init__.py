"""API routes."""

from fastapi import APIRouter

from tvtracker.api import accounts, health, media

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(accounts.router, tags=["accounts"])
router.include_router(media.router, tags=["media"])
