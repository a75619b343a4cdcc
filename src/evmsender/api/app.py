"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from evmsender import __version__
from evmsender.config import get_settings
from evmsender.signing.factory import get_signer

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup: load the signing key once for the process lifetime
    signer = get_signer()
    if signer.health_check():
        logger.info(f"Sending from {signer.resolve().address}")
    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="evmsender API",
        description="Native-asset transfers on EVM-compatible chains",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )

    # Register routes
    from evmsender.api.routes import health, transfer

    app.include_router(health.router, tags=["Health"])
    app.include_router(transfer.router, tags=["Transfers"])

    return app
