from datetime import datetime, timezone
from uuid import UUID

from sqlmodel import Field, SQLModel

__all__ = [
    "Connection",
    "ConnectionRequest",
]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Connection(SQLModel, table=True):
    # Stored once per direction: (a, b) and (b, a).
    user_id: UUID = Field(
        foreign_key="user.id", primary_key=True, ondelete="CASCADE"
    )
    connection_id: UUID = Field(
        foreign_key="user.id", primary_key=True, ondelete="CASCADE"
    )


class ConnectionRequest(SQLModel, table=True):
    sender_id: UUID = Field(
        foreign_key="user.id", primary_key=True, ondelete="CASCADE"
    )
    receiver_id: UUID = Field(
        foreign_key="user.id", primary_key=True, index=True, ondelete="CASCADE"
    )
    created_at: datetime = Field(default_factory=_utcnow)
