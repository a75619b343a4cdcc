"""Health check endpoints."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from evmsender import __version__
from evmsender.config import get_settings
from evmsender.signing.factory import get_signer_info

router = APIRouter()


@router.get("/", response_class=PlainTextResponse)
async def root():
    """Liveness greeting."""
    return "Hello, World!"


@router.get("/health")
async def health_check():
    """Basic health check endpoint."""
    return {"status": "healthy", "service": "evmsender"}


@router.get("/health/detailed")
async def detailed_health():
    """Detailed health check with configuration and signer info."""
    settings = get_settings()
    signer = get_signer_info()
    return {
        "status": "healthy" if signer["healthy"] else "degraded",
        "service": "evmsender",
        "version": __version__,
        "signer": signer,
        "config": settings.get_safe_dict(),
    }
