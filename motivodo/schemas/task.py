from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime
import uuid

from ..core.timeutils import as_utc
from ..models.task import TaskPriority

# JSON uses camelCase (dueDate, createdAt); snake_case is accepted on input too
camel_config = ConfigDict(
    alias_generator=to_camel, populate_by_name=True, from_attributes=True
)


class TaskBase(BaseModel):
    model_config = camel_config

    title: str = Field(min_length=1)
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    completed: bool = False
    priority: TaskPriority = TaskPriority.medium
    category: Optional[str] = None

    @field_validator("due_date")
    @classmethod
    def due_date_utc(cls, value):
        # Keep the instant, drop the caller's offset
        return as_utc(value)


class TaskCreate(TaskBase):
    pass


class TaskRead(TaskBase):
    id: uuid.UUID
    user_id: uuid.UUID
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def created_at_utc(cls, value):
        return as_utc(value)


class TaskUpdate(BaseModel):
    """Partial update; only the fields present in the payload are applied."""

    model_config = camel_config

    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    completed: Optional[bool] = None
    priority: Optional[TaskPriority] = None
    category: Optional[str] = None

    @field_validator("title", "completed", "priority")
    @classmethod
    def not_null(cls, value):
        # These columns are NOT NULL; omit the field instead of sending null
        if value is None:
            raise ValueError("may not be null")
        return value

    @field_validator("due_date")
    @classmethod
    def due_date_utc(cls, value):
        return as_utc(value)
