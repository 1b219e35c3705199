"""Main FastAPI application for the get IT done task manager."""
from fastapi import FastAPI
from typing import Optional
import logging

from getitdone import __version__
from getitdone.config import Settings, get_settings
from getitdone.db.config import engine
from getitdone.db.init import init_db
from getitdone.middleware.cors import add_cors_middleware
from getitdone.middleware.errors import add_exception_handlers
from getitdone.middleware.request_logging import add_request_logging
from getitdone.routers import (
    categories_router,
    goals_router,
    health_router,
    projects_router,
    stats_router,
    tags_router,
    tasks_router,
)
from getitdone.utils.logger import configure_logging

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI application."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="get IT done API",
        description="REST API for tasks, projects, categories, goals and tags",
        version=__version__,
    )

    add_cors_middleware(app, settings)
    add_request_logging(app)
    add_exception_handlers(app)

    @app.on_event("startup")
    def startup_event():
        """Create database tables on startup."""
        try:
            init_db(engine)
        except Exception:
            logger.exception("Database initialization failed; check DATABASE_URL and that the database is reachable")
            raise
        logger.info("Application startup complete.")

    @app.get("/")
    def root():
        """Root endpoint - API welcome message."""
        return {
            "message": "Welcome to the get IT done API",
            "version": __version__,
            "docs": "/docs",
            "health": f"{API_PREFIX}/health",
        }

    for router in (
        health_router,
        tasks_router,
        projects_router,
        categories_router,
        goals_router,
        tags_router,
        stats_router,
    ):
        app.include_router(router, prefix=API_PREFIX)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "getitdone.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=not settings.is_production,
    )
