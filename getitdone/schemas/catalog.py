"""Schemas for projects, categories, goals and tags."""
from pydantic import Field, field_validator
from datetime import datetime
from typing import List, Optional

from getitdone.models.category import DEFAULT_CATEGORY_COLOR
from getitdone.schemas.base import ApiModel, parse_datetime, require_text


# Projects

class ProjectCreate(ApiModel):
    name: str = Field(..., max_length=200)
    description: str = Field("", max_length=2000)

    @field_validator("name", mode="before")
    @classmethod
    def name_not_blank(cls, value):
        return require_text(value, "name")


class ProjectUpdate(ApiModel):
    name: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)

    @field_validator("name", mode="before")
    @classmethod
    def name_not_blank(cls, value):
        return require_text(value, "name")

    @field_validator("description", mode="before")
    @classmethod
    def none_is_empty(cls, value):
        return "" if value is None else value


class ProjectRead(ApiModel):
    id: str
    name: str
    description: str = ""
    created_at: datetime
    updated_at: datetime


class ProjectEnvelope(ApiModel):
    project: ProjectRead


class ProjectListEnvelope(ApiModel):
    projects: List[ProjectRead]


# Categories

class CategoryCreate(ApiModel):
    name: str = Field(..., max_length=100)
    color: str = Field(DEFAULT_CATEGORY_COLOR, max_length=20)

    @field_validator("name", mode="before")
    @classmethod
    def name_not_blank(cls, value):
        return require_text(value, "name")

    @field_validator("color", mode="before")
    @classmethod
    def default_color(cls, value):
        return value or DEFAULT_CATEGORY_COLOR


class CategoryUpdate(ApiModel):
    name: Optional[str] = Field(None, max_length=100)
    color: Optional[str] = Field(None, max_length=20)

    @field_validator("name", mode="before")
    @classmethod
    def name_not_blank(cls, value):
        return require_text(value, "name")

    @field_validator("color", mode="before")
    @classmethod
    def default_color(cls, value):
        return value or DEFAULT_CATEGORY_COLOR


class CategoryRead(ApiModel):
    id: str
    name: str
    color: str = DEFAULT_CATEGORY_COLOR
    created_at: datetime
    updated_at: datetime


class CategoryEnvelope(ApiModel):
    category: CategoryRead


class CategoryListEnvelope(ApiModel):
    categories: List[CategoryRead]


# Goals

class GoalCreate(ApiModel):
    title: str = Field(..., max_length=200)
    description: str = Field("", max_length=2000)
    target_date: Optional[datetime] = None

    @field_validator("title", mode="before")
    @classmethod
    def title_not_blank(cls, value):
        return require_text(value, "title")

    @field_validator("target_date", mode="before")
    @classmethod
    def parse_target_date(cls, value):
        return parse_datetime(value, "targetDate")


class GoalUpdate(ApiModel):
    title: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    target_date: Optional[datetime] = None

    @field_validator("title", mode="before")
    @classmethod
    def title_not_blank(cls, value):
        return require_text(value, "title")

    @field_validator("description", mode="before")
    @classmethod
    def none_is_empty(cls, value):
        return "" if value is None else value

    @field_validator("target_date", mode="before")
    @classmethod
    def parse_target_date(cls, value):
        return parse_datetime(value, "targetDate")


class GoalRead(ApiModel):
    id: str
    title: str
    description: str = ""
    target_date: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class GoalEnvelope(ApiModel):
    goal: GoalRead


class GoalListEnvelope(ApiModel):
    goals: List[GoalRead]


# Tags

class TagCreate(ApiModel):
    name: str = Field(..., max_length=100)

    @field_validator("name", mode="before")
    @classmethod
    def name_not_blank(cls, value):
        return require_text(value, "name")


class TagUpdate(ApiModel):
    name: Optional[str] = Field(None, max_length=100)

    @field_validator("name", mode="before")
    @classmethod
    def name_not_blank(cls, value):
        return require_text(value, "name")


class TagRead(ApiModel):
    id: str
    name: str
    created_at: datetime
    updated_at: datetime


class TagEnvelope(ApiModel):
    tag: TagRead


class TagListEnvelope(ApiModel):
    tags: List[TagRead]
