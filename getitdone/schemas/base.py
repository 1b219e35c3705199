"""Shared pydantic configuration and field helpers."""
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base schema: snake_case in Python, camelCase on the wire."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


def require_text(value: Optional[str], field: str) -> str:
    """Trim ``value`` and reject blanks."""
    if value is None:
        raise ValueError(f"{field} is required")
    value = value.strip()
    if not value:
        raise ValueError(f"{field} is required")
    return value


def parse_datetime(value: Any, field: str) -> Optional[datetime]:
    """
    Parse an ISO date or datetime into a naive UTC datetime.

    Date-only strings become midnight of that day. Raises ValueError for
    anything else so the request is rejected.
    """
    if value is None or isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith("Z") or text.endswith("z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise ValueError(f"{field} must be an ISO date (YYYY-MM-DD) or datetime")
    else:
        raise ValueError(f"{field} must be an ISO date (YYYY-MM-DD) or datetime")

    if parsed is not None and parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed
