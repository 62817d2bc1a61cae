"""
API routes package initialization.
"""

from fastapi import APIRouter

from voicegrade.api.analyze import router as analyze_router
from voicegrade.api.auth import router as auth_router
from voicegrade.api.directory import router as directory_router
from voicegrade.api.documents import router as documents_router
from voicegrade.api.essays import router as essays_router
from voicegrade.api.settings import router as settings_router

# Create main API router with v1 versioning
api_router = APIRouter(prefix="/api/v1")

# Include all sub-routers
api_router.include_router(analyze_router)
api_router.include_router(essays_router)
api_router.include_router(directory_router)
api_router.include_router(documents_router)
api_router.include_router(auth_router)
api_router.include_router(settings_router)

__all__ = ["api_router"]
