"""Category model for SQLModel."""
from sqlmodel import SQLModel, Field
from pydantic import NaiveDatetime

from getitdone.models.base import datetime_column, new_id, utcnow

DEFAULT_CATEGORY_COLOR = "#6b7280"


class Category(SQLModel, table=True):
    """A colored label used to group tasks on the dashboard."""

    id: str = Field(default_factory=new_id, primary_key=True, index=True)
    name: str = Field(max_length=100)
    color: str = Field(default=DEFAULT_CATEGORY_COLOR, max_length=20)
    created_at: NaiveDatetime = Field(default_factory=utcnow, sa_column=datetime_column())
    updated_at: NaiveDatetime = Field(default_factory=utcnow, sa_column=datetime_column())
