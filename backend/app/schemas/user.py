from uuid import UUID

from sqlmodel import SQLModel

__all__ = [
    "UserPublic",
    "UserSummary",
]


class UserPublic(SQLModel):
    id: UUID
    username: str
    email: str
    is_active: bool
    name: str | None = None
    position: str | None = None
    city: str | None = None


class UserSummary(SQLModel):
    username: str
    name: str | None = None
    position: str | None = None
    city: str | None = None
