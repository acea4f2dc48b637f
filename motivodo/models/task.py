from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional
from datetime import datetime
import uuid
from enum import Enum

from ..core.timeutils import utcnow


class TaskPriority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


class Task(SQLModel, table=True):
    __tablename__ = "tasks"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: uuid.UUID = Field(foreign_key="users.id", index=True, nullable=False)
    title: str = Field(nullable=False)
    description: Optional[str] = Field(default=None)
    # Stored as UTC
    due_date: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))
    completed: bool = Field(default=False, nullable=False)
    priority: TaskPriority = Field(default=TaskPriority.medium, nullable=False)
    category: Optional[str] = Field(default=None, nullable=True)

    # Immutable; drives the default newest-first ordering
    created_at: datetime = Field(
        default_factory=utcnow, sa_type=DateTime(timezone=True), nullable=False
    )

    # Relationship to user
    user: Optional["User"] = Relationship(back_populates="tasks")
