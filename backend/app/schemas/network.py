from sqlmodel import SQLModel

from app.core.enums import ConnectionStatus
from app.schemas.user import UserSummary

__all__ = [
    "ConnectionPair",
    "ConnectionStatusPublic",
    "ConnectionsPublic",
    "PendingRequestsPublic",
    "ConnectionRequestsPublic",
    "SuggestionsPublic",
]


class ConnectionPair(SQLModel):
    requester: str
    recipient: str


class ConnectionStatusPublic(SQLModel):
    username: str
    status: ConnectionStatus


class ConnectionsPublic(SQLModel):
    connections: list[str]


class PendingRequestsPublic(SQLModel):
    pending_requests: list[str]


class ConnectionRequestsPublic(SQLModel):
    connection_requests: list[str]


class SuggestionsPublic(SQLModel):
    suggestions: list[UserSummary]
