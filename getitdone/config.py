"""Environment-driven configuration for the get IT done API."""
from dataclasses import dataclass
from datetime import datetime, timezone
from functools import lru_cache
import os

from dotenv import load_dotenv

# Load variables from a local .env file before anything reads os.environ
load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    """Application settings, passed explicitly to whatever needs them."""

    database_url: str = "sqlite:///./get_it_done.db"
    environment: str = "development"
    frontend_url: str = "http://localhost:5173"
    port: int = 4000
    log_level: str = "INFO"
    sql_echo: bool = False
    week_start: int = 0  # 0 = Monday ... 6 = Sunday
    upcoming_weeks: int = 4

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables, falling back to defaults."""
        week_start = _env_int("WEEK_START", 0)
        if week_start not in range(7):
            week_start = 0
        return cls(
            database_url=os.environ.get("DATABASE_URL", cls.database_url),
            environment=os.environ.get("ENVIRONMENT", cls.environment),
            frontend_url=os.environ.get("FRONTEND_URL", cls.frontend_url),
            port=_env_int("PORT", cls.port),
            log_level=os.environ.get("LOG_LEVEL", cls.log_level).upper(),
            sql_echo=_env_bool("SQL_ECHO", False),
            week_start=week_start,
            upcoming_weeks=max(0, _env_int("UPCOMING_WEEKS", cls.upcoming_weeks)),
        )


@lru_cache
def get_settings() -> Settings:
    """Dependency returning the process settings."""
    return Settings.from_env()


def get_now() -> datetime:
    """Dependency returning the reference instant (naive UTC) used for date-based views."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
