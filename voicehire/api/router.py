"""
Main API router for VoiceHire

Aggregates all API routes and provides the main application router.
"""

from fastapi import APIRouter

from voicehire.api.endpoints import auth, interview, metadata, proctoring, report
from voicehire.config.settings import get_settings

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["Auth"]
)

api_router.include_router(
    interview.router,
    prefix="/interview",
    tags=["Interview"]
)

api_router.include_router(
    report.router,
    prefix="/report",
    tags=["Report"]
)

api_router.include_router(
    proctoring.router,
    prefix="/proctor",
    tags=["Proctoring"]
)

api_router.include_router(
    metadata.router,
    prefix="/metadata",
    tags=["Metadata"]
)


@api_router.get("/health", tags=["Health"])
async def api_health() -> dict[str, str]:
    """API health check."""
    settings = get_settings()
    return {
        "status": "healthy",
        "version": settings.app_version,
        "generation_api": "configured" if settings.gemini_configured else "local",
    }
