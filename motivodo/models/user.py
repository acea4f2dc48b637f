from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field, Relationship
from typing import List
from datetime import datetime
import uuid

from ..core.timeutils import utcnow


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    # Matched exactly on login, never case-folded
    username: str = Field(unique=True, index=True, nullable=False)
    # bcrypt hash; never leaves the server
    password: str = Field(nullable=False)
    created_at: datetime = Field(
        default_factory=utcnow, sa_type=DateTime(timezone=True), nullable=False
    )

    # Relationship to tasks
    tasks: List["Task"] = Relationship(back_populates="user")
