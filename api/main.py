"""
Music Commerce API - FastAPI Application

Main entry point for the API server.
Environment-agnostic: configuration reads from settings (.env file).
"""

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from music_commerce.logging_setup import setup_logging
from music_commerce.settings import get_settings
from api.dependencies import lifespan_handler
from api.exception_handlers import register_exception_handlers
from api.routers import catalog, commerce, health, users

# Get settings
cfg = get_settings()

# Configure logging
setup_logging(cfg.log_level)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """
    Application factory for creating FastAPI app.

    Configuration is loaded from settings (reads from .env file).

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="Music Commerce API",
        description="Catalog and per-user commerce resources with ownership-scoped access control",
        version="0.1.0",
        lifespan=lifespan_handler  # Handles startup/shutdown
    )

    # CORS configuration from settings
    logger.info(f"Configuring CORS with origins: {cfg.cors_origins}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Mount routers
    app.include_router(users.router, prefix="/api/v1")
    for router in catalog.routers:
        app.include_router(router, prefix="/api/v1")
    for router in commerce.routers:
        app.include_router(router, prefix="/api/v1")
    app.include_router(health.router, prefix="/api/v1/health", tags=["health"])

    logger.info(f"FastAPI application created (env={cfg.env})")

    return app


# Create app instance
app = create_app()


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint - API info"""
    return {
        "name": "Music Commerce API",
        "version": "0.1.0",
        "environment": cfg.env,
        "status": "running",
        "docs": "/docs",
        "health": "/api/v1/health/ready"
    }


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting API server on {cfg.api_host}:{cfg.api_port}")
    logger.info(f"Environment: {cfg.env}")
    logger.info(f"Reload: {cfg.api_reload}")
    logger.info(f"Workers: {cfg.api_workers}")

    uvicorn.run(
        "api.main:app",
        host=cfg.api_host,
        port=cfg.api_port,
        reload=cfg.api_reload,
        workers=cfg.api_workers if not cfg.api_reload else 1,  # Workers only work without reload
        log_level=cfg.log_level.lower()
    )
