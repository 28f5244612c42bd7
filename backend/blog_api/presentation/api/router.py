"""Top-level API router — aggregates all endpoint routers under /api."""

from fastapi import APIRouter

from blog_api.presentation.api.endpoints.blog import router as blog_router
from blog_api.presentation.api.endpoints.generation import router as generation_router
from blog_api.presentation.api.endpoints.health import router as health_router

router = APIRouter(prefix="/api")
router.include_router(health_router)
router.include_router(generation_router)
router.include_router(blog_router)
