"""
FastAPI application initialization and configuration.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from bootstrap import Services, build_services
from .middleware import log_requests_middleware
from .endpoints import auth_router, health_router, posts_router

logger = logging.getLogger(__name__)


def create_app(services: Optional[Services] = None, close_on_shutdown: bool = True) -> FastAPI:
    """Create the FastAPI app around already-built services

    Builds services from configuration when none are given, so a missing
    credential fails here rather than on the first request.
    """
    services = services or build_services()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if close_on_shutdown:
            await services.aclose()
            logger.debug("Upstream HTTP client closed")

    app = FastAPI(title="Gemini Tweet Bot", version="1.0.0", lifespan=lifespan)
    app.state.services = services

    app.middleware("http")(log_requests_middleware)

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(posts_router)

    logger.debug("FastAPI application initialized with all routers and middleware")
    return app
