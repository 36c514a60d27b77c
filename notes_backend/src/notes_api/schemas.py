from datetime import datetime, timezone
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field, field_validator


# Pydantic models for serialization and validation

class AccountCreate(BaseModel):
    username: str = Field(..., min_length=1, max_length=64, description="Account username")
    password: str = Field(..., min_length=1, max_length=256)
    email: EmailStr
    date_of_birth: str = Field(
        default="",
        max_length=32,
        validation_alias=AliasChoices("date_of_birth", "DateOfBirth", "date of birth"),
    )


class SignIn(BaseModel):
    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1, max_length=256)


class AccountDelete(BaseModel):
    username: str = Field(..., min_length=1, max_length=64)


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class NoteCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=128)
    description: Optional[str] = Field(default=None, description="Note body")
    user: str = Field(..., min_length=1, max_length=64, description="Owner username")
    date: Optional[datetime] = None


class NoteUpdate(BaseModel):
    # The (user, title) key is immutable; a title sent here is accepted and ignored.
    title: Optional[str] = Field(default=None, max_length=128)
    description: Optional[str] = None
    date: Optional[datetime] = None


class NoteOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    user: str
    date: datetime

    @field_validator("date")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        # Some backends (SQLite) hand stored UTC dates back without tzinfo.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
