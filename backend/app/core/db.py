from typing import Any

from sqlalchemy.engine import Engine
from sqlmodel import create_engine

from app.core.config import settings


def build_engine(url: str, statement_timeout_ms: int | None = None) -> Engine:
    """
    Create the engine every session of the application is bound to.

    On PostgreSQL each connection gets a server-side statement timeout, so a
    stuck store call fails (and rolls back) instead of hanging the request.
    """
    connect_args: dict[str, Any] = {}
    if url.startswith("postgresql") and statement_timeout_ms:
        connect_args["options"] = f"-c statement_timeout={statement_timeout_ms}"
    return create_engine(url, pool_pre_ping=True, connect_args=connect_args)


engine = build_engine(
    settings.SQLALCHEMY_DATABASE_URI,
    statement_timeout_ms=settings.DB_STATEMENT_TIMEOUT_MS,
)


def dispose_engine() -> None:
    engine.dispose()
