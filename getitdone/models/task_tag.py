"""Association table between tasks and tags."""
from sqlmodel import SQLModel, Field
from sqlalchemy import Column, String, ForeignKey


class TaskTagLink(SQLModel, table=True):
    """One row per (task, tag) pair; removing either side removes the row."""

    task_id: str = Field(
        sa_column=Column(String, ForeignKey("task.id", ondelete="CASCADE"), primary_key=True)
    )
    tag_id: str = Field(
        sa_column=Column(String, ForeignKey("tag.id", ondelete="CASCADE"), primary_key=True)
    )
