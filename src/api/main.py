"""
FastAPI Application Factory

Assembles the viewer's HTTP adapter:
- Routes (viewer playback/options, system tasks)
- CORS for the browser front end
- Exception handlers

The factory lets tests build the same app with their own service container.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from typing import Optional

from api.routes import viewer, system
from api.middleware.error_handler import register_exception_handlers
from utils.logger import get_logger
from models.enums import LogCategory

log = get_logger().for_category(LogCategory.API)


def create_app(
    title: str = "Radar Loop Viewer",
    description: str = "Animated radar and satellite tile overlays",
    version: str = "1.0.0",
    docs_enabled: bool = True,
    cors_origins: Optional[list[str]] = None
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        title: API title (shown in docs)
        description: API description
        version: API version
        docs_enabled: Enable /docs and /redoc
        cors_origins: CORS allowed origins (default: local dev servers)

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title=title,
        description=description,
        version=version,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None
    )

    log.info(f"Creating FastAPI app: {title} v{version}")

    # =========================================================================
    # CORS Configuration
    # =========================================================================

    if not cors_origins:
        cors_origins = [
            "http://localhost:3000",
            "http://localhost:5173",
            "http://localhost",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5173",
        ]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    register_exception_handlers(app)

    # =========================================================================
    # Routes
    # =========================================================================

    app.include_router(viewer.router, prefix="/api/v1")
    app.include_router(system.router, prefix="/api/v1")

    log.debug("Routes registered: viewer (/api/v1/viewer), system (/api/v1/system)")

    @app.get(
        "/api/health",
        tags=["System"],
        summary="Health check",
        description="Check if API is running and responding"
    )
    async def health_check():
        return {
            "status": "healthy",
            "service": "radar-loop-api",
            "version": version
        }

    @app.get("/", include_in_schema=False)
    async def root():
        return {
            "message": title,
            "docs": "/docs",
            "health": "/api/health",
            "state": "/api/v1/viewer/state"
        }

    return app
