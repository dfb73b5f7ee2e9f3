"""Task and category models for the to-do list."""

from datetime import date, datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from taskchat.models.timestamps import utcnow


class Category(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    color: str = Field(default="#3B82F6")
    created_at: datetime = Field(default_factory=utcnow)


class Task(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    description: Optional[str] = None
    status: str = Field(default="pending")  # pending | in-progress | completed
    priority: str = Field(default="medium")  # low | medium | high
    due_date: Optional[date] = None
    category_id: Optional[int] = Field(default=None, foreign_key="category.id")
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
