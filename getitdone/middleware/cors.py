"""CORS configuration for the browser client + FastAPI integration."""
from fastapi.middleware.cors import CORSMiddleware
import logging

from getitdone.config import Settings

logger = logging.getLogger(__name__)

# Vite dev server and preview
DEV_ORIGINS = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:4173",
]


def allowed_origins(settings: Settings) -> list:
    origins = list(DEV_ORIGINS)
    if settings.frontend_url and settings.frontend_url not in origins:
        origins.append(settings.frontend_url)
    return origins


def add_cors_middleware(app, settings: Settings):
    """Add CORS middleware to the FastAPI application."""
    if settings.is_production:
        # Only the configured frontend may call the API in production
        origins = [settings.frontend_url]
    else:
        origins = allowed_origins(settings)
    logger.info(f"CORS environment={settings.environment} origins={origins}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
