import re
import uuid

from pydantic import EmailStr, field_validator
from sqlmodel import Field, SQLModel

__all__ = [
    "UserBase",
    "UserCreate",
    "UserRegister",
    "User",
]

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


def _check_username(value: str) -> str:
    if not USERNAME_PATTERN.match(value):
        raise ValueError(
            "Username may only contain letters, digits, '.', '_' and '-'."
        )
    return value


# Shared properties
class UserBase(SQLModel):
    username: str = Field(unique=True, index=True, min_length=1, max_length=64)
    email: EmailStr = Field(unique=True, index=True, max_length=255)
    is_active: bool = Field(default=True)
    name: str | None = Field(default=None, max_length=255)
    position: str | None = Field(default=None, max_length=255)
    city: str | None = Field(default=None, max_length=255)


# Properties to receive on creation
class UserCreate(UserBase):
    password: str = Field(min_length=1, max_length=255)

    @field_validator("username")
    @classmethod
    def username_charset(cls, value: str) -> str:
        return _check_username(value)


# Properties to receive via API on signup
class UserRegister(SQLModel):
    username: str = Field(min_length=1, max_length=64)
    email: EmailStr = Field(max_length=255)
    password: str = Field(min_length=1, max_length=255)
    name: str | None = Field(default=None, max_length=255)
    position: str | None = Field(default=None, max_length=255)
    city: str | None = Field(default=None, max_length=255)

    @field_validator("username")
    @classmethod
    def username_charset(cls, value: str) -> str:
        return _check_username(value)


# Database model, database table inferred from class name
class User(UserBase, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    hashed_password: str
