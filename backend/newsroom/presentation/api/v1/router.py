"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from newsroom.presentation.api.v1.endpoints.health import router as health_router
from newsroom.presentation.api.v1.endpoints.public import router as public_router
from newsroom.presentation.api.v1.endpoints.auth import router as auth_router
from newsroom.presentation.api.v1.endpoints.dashboard import router as dashboard_router
from newsroom.presentation.api.v1.endpoints.admin_articles import router as admin_articles_router
from newsroom.presentation.api.v1.endpoints.admin_taxonomy import router as admin_taxonomy_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(public_router)
router.include_router(auth_router)
router.include_router(dashboard_router)
router.include_router(admin_articles_router)
router.include_router(admin_taxonomy_router)
