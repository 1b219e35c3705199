"""API routers mounted under /api."""

from .categories import router as categories_router
from .goals import router as goals_router
from .health import router as health_router
from .projects import router as projects_router
from .stats import router as stats_router
from .tags import router as tags_router
from .tasks import router as tasks_router

__all__ = [
    "categories_router",
    "goals_router",
    "health_router",
    "projects_router",
    "stats_router",
    "tags_router",
    "tasks_router",
]
