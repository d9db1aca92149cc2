"""
FastAPI Main Application for the Chopo Web API
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from api.auth_context import set_auth_context
from api.routers import images, notifications, users
from auth.rate_limiter import LoginRateLimiter
from auth.session_manager import SessionManager
from Database import Database


logger = logging.getLogger("uvicorn.error")

SERVICE_NAME = "Chopo API"
API_VERSION = "1.0.0"


def create_app(
    session_manager: SessionManager,
    rate_limiter: LoginRateLimiter,
    config: Dict[str, Any],
    database: Optional[Database] = None,
) -> FastAPI:
    """
    Builds the FastAPI application.

    The session manager is created once at startup by the caller and shared
    by every request through the app state.

    Args:
        session_manager: Session manager shared by all handlers
        rate_limiter: Login rate limiter
        config: Full configuration dict
        database: Connected database (None when repositories are provided otherwise, e.g. in tests)
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if app.state.database is not None:
            app.state.database.close()
        logger.info("%s stopped (%s active sessions discarded)", SERVICE_NAME, session_manager.active_session_count())

    app = FastAPI(
        title=SERVICE_NAME,
        description="REST API for user accounts, images and notifications",
        version=API_VERSION,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        lifespan=lifespan,
    )

    # CORS middleware for frontend access
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.get("api", {}).get("cors_origins", ["*"]),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.database = database
    set_auth_context(app, session_manager=session_manager, rate_limiter=rate_limiter, config=config)

    # Include routers
    app.include_router(users.router, prefix="/api")
    app.include_router(images.router, prefix="/api")
    app.include_router(notifications.router, prefix="/api")

    @app.get("/api/health")
    def health_check(request: Request):
        """Health check endpoint"""
        manager = request.app.state.auth_context.session_manager
        return {
            "status": "healthy",
            "service": SERVICE_NAME,
            "version": API_VERSION,
            "active_sessions": manager.active_session_count(),
        }

    return app
