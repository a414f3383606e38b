from uuid import UUID

from sqlmodel import Session, col, select

from app.models.connection import Connection, ConnectionRequest
from app.models.user import User

__all__ = [
    "are_users_connected",
    "has_sent_connection_request",
    "create_connection",
    "delete_connection",
    "create_connection_request",
    "delete_connection_request",
    "get_connection_usernames",
    "get_pending_request_usernames",
    "get_connection_request_usernames",
    "get_suggestions",
]


def are_users_connected(
    *,
    session: Session,
    user_id: UUID,
    other_id: UUID,
) -> bool:
    """
    Check if two users are connected.

    Parameters:
        session (Session): The database session.
        user_id (UUID): The ID of the first user.
        other_id (UUID): The ID of the second user.
    Returns:
        bool: True if the users are connected, False otherwise.
    """
    connection = session.exec(
        select(Connection).where(
            Connection.user_id == user_id,
            Connection.connection_id == other_id,
        )
    ).one_or_none()
    return connection is not None


def has_sent_connection_request(
    *,
    session: Session,
    sender_id: UUID,
    receiver_id: UUID,
) -> bool:
    """
    Check if a user has a pending connection request to another user.

    Parameters:
        session (Session): The database session.
        sender_id (UUID): The ID of the user who sent the request.
        receiver_id (UUID): The ID of the user who received the request.
    Returns:
        bool: True if the request exists, False otherwise.
    """
    request = session.exec(
        select(ConnectionRequest).where(
            ConnectionRequest.sender_id == sender_id,
            ConnectionRequest.receiver_id == receiver_id,
        )
    ).one_or_none()
    return request is not None


def create_connection(
    *,
    session: Session,
    user_id: UUID,
    other_id: UUID,
) -> Connection:
    """
    Create a two-way connection between two users.

    Parameters:
        session (Session): The database session.
        user_id (UUID): The ID of the user creating the connection.
        other_id (UUID): The ID of the user being connected with.
    Returns:
        Connection: The connection row seen from user_id.
    Raises:
        IntegrityError: If the users are already connected or either user does not exist.
    """
    connection = Connection(user_id=user_id, connection_id=other_id)
    reverse_connection = Connection(user_id=other_id, connection_id=user_id)
    session.add(connection)
    session.add(reverse_connection)
    session.flush()
    return connection


def delete_connection(
    *,
    session: Session,
    user_id: UUID,
    other_id: UUID,
) -> bool:
    """
    Delete both directions of a connection between two users.
    Deleting a connection that does not exist is a no-op.

    Returns:
        bool: True if any row was deleted.
    """
    rows = session.exec(
        select(Connection).where(
            (
                (col(Connection.user_id) == user_id)
                & (col(Connection.connection_id) == other_id)
            )
            | (
                (col(Connection.user_id) == other_id)
                & (col(Connection.connection_id) == user_id)
            )
        )
    ).all()
    for row in rows:
        session.delete(row)
    session.flush()
    return bool(rows)


def create_connection_request(
    *,
    session: Session,
    sender_id: UUID,
    receiver_id: UUID,
) -> ConnectionRequest:
    """
    Create a connection request from one user to another.

    The single row is both the sender's pending request and the receiver's
    incoming request.

    Parameters:
        session (Session): The database session.
        sender_id (UUID): The ID of the user sending the request.
        receiver_id (UUID): The ID of the user receiving the request.
    Returns:
        ConnectionRequest: The created request.
    Raises:
        IntegrityError: If the request already exists or either user does not exist.
    """
    request = ConnectionRequest(sender_id=sender_id, receiver_id=receiver_id)
    session.add(request)
    session.flush()
    return request


def delete_connection_request(
    *,
    session: Session,
    sender_id: UUID,
    receiver_id: UUID,
) -> bool:
    """
    Delete the connection request sent from one user to another, if any.

    Returns:
        bool: True if a request was deleted.
    """
    request = session.exec(
        select(ConnectionRequest).where(
            ConnectionRequest.sender_id == sender_id,
            ConnectionRequest.receiver_id == receiver_id,
        )
    ).one_or_none()
    if request is None:
        return False
    session.delete(request)
    session.flush()
    return True


def get_connection_usernames(*, session: Session, user_id: UUID) -> list[str]:
    stmt = (
        select(User.username)
        .join(Connection, col(Connection.connection_id) == col(User.id))
        .where(Connection.user_id == user_id)
        .order_by(col(User.username))
    )
    return list(session.exec(stmt).all())


def get_pending_request_usernames(*, session: Session, user_id: UUID) -> list[str]:
    """Usernames the user has sent a request to."""
    stmt = (
        select(User.username)
        .join(ConnectionRequest, col(ConnectionRequest.receiver_id) == col(User.id))
        .where(ConnectionRequest.sender_id == user_id)
        .order_by(col(User.username))
    )
    return list(session.exec(stmt).all())


def get_connection_request_usernames(*, session: Session, user_id: UUID) -> list[str]:
    """Usernames that have sent the user a request."""
    stmt = (
        select(User.username)
        .join(ConnectionRequest, col(ConnectionRequest.sender_id) == col(User.id))
        .where(ConnectionRequest.receiver_id == user_id)
        .order_by(col(User.username))
    )
    return list(session.exec(stmt).all())


def get_suggestions(*, session: Session, user_id: UUID, limit: int) -> list[User]:
    """
    Get users the given user has no relationship with yet.

    Excludes the user, their connections, the users they sent a request to and
    the users who sent them a request. Ordered by username.

    Parameters:
        session (Session): The database session.
        user_id (UUID): The ID of the user to suggest connections for.
        limit (int): The maximum number of users to return.
    Returns:
        list[User]: The suggested users.
    """
    connected = select(Connection.connection_id).where(Connection.user_id == user_id)
    pending = select(ConnectionRequest.receiver_id).where(
        ConnectionRequest.sender_id == user_id
    )
    requesting = select(ConnectionRequest.sender_id).where(
        ConnectionRequest.receiver_id == user_id
    )
    stmt = (
        select(User)
        .where(
            col(User.id) != user_id,
            col(User.id).not_in(connected),
            col(User.id).not_in(pending),
            col(User.id).not_in(requesting),
        )
        .order_by(col(User.username))
        .limit(limit)
    )
    return list(session.exec(stmt).all())
