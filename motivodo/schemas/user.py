from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from datetime import datetime
import uuid

from ..core.timeutils import as_utc


class UserCredentials(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserCreate(UserCredentials):
    pass


class UserLogin(UserCredentials):
    pass


class UserRead(BaseModel):
    """Public view of a user; the password hash is never part of it."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: uuid.UUID
    username: str
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def created_at_utc(cls, value):
        return as_utc(value)


class Message(BaseModel):
    message: str
