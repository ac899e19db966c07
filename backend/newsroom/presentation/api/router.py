"""Mounts the versioned JSON API under /api. Feeds live at the site root."""

from fastapi import APIRouter

from newsroom.presentation.api.v1.router import router as v1_router

router = APIRouter(prefix="/api")
router.include_router(v1_router)
