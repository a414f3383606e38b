from collections.abc import Iterator
from contextlib import contextmanager
from logging import getLogger

from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlmodel import Session

from app.converters import user as user_converters
from app.core.config import settings
from app.core.enums import ConnectionStatus
from app.crud import connection as connection_crud
from app.crud import user as user_crud
from app.exceptions.base import AppError
from app.exceptions.network_exceptions import (
    AlreadyConnectedError,
    DuplicateRequestError,
    NoSuchRequestError,
    ReciprocalRequestError,
    SelfReferenceError,
    StoreUnavailableError,
)
from app.exceptions.user_exceptions import UserNotFound
from app.models.auth_schemas import Message
from app.models.user import User
from app.schemas.network import ConnectionPair, ConnectionStatusPublic
from app.schemas.user import UserSummary

logger = getLogger(__name__)


def _lock_pair(
    *,
    session: Session,
    acting_username: str,
    other_username: str,
) -> tuple[User, User]:
    users = user_crud.get_users_for_update(
        session=session,
        usernames=[acting_username, other_username],
    )
    for username in (acting_username, other_username):
        if username not in users:
            raise UserNotFound(username)
    return users[acting_username], users[other_username]


def _get_user(*, session: Session, username: str) -> User:
    user = user_crud.get_user_by_username(session=session, username=username)
    if user is None:
        raise UserNotFound(username)
    return user


@contextmanager
def _read_errors() -> Iterator[None]:
    try:
        yield
    except AppError:
        raise
    except DBAPIError as e:
        raise StoreUnavailableError from e


def send_request(
    *,
    session: Session,
    acting_username: str,
    target_username: str,
) -> Message:
    """
    Send a connection request from the acting user to the target user.

    The request is a single row, so the sender's pending request and the
    receiver's incoming request appear (or not) together.

    Raises:
        SelfReferenceError: If the acting user targets themselves.
        UserNotFound: If either user does not exist.
        AlreadyConnectedError: If the users are already connected.
        DuplicateRequestError: If the acting user already sent a request.
        ReciprocalRequestError: If the target already sent the acting user a request.
        StoreUnavailableError: If the store fails; nothing is written.
        AppError: For any other (unexpected) errors.
    """
    if acting_username == target_username:
        raise SelfReferenceError(acting_username)
    try:
        acting, target = _lock_pair(
            session=session,
            acting_username=acting_username,
            other_username=target_username,
        )
        if connection_crud.are_users_connected(
            session=session, user_id=acting.id, other_id=target.id
        ):
            raise AlreadyConnectedError(acting_username, target_username)
        if connection_crud.has_sent_connection_request(
            session=session, sender_id=acting.id, receiver_id=target.id
        ):
            raise DuplicateRequestError(acting_username, target_username)
        if connection_crud.has_sent_connection_request(
            session=session, sender_id=target.id, receiver_id=acting.id
        ):
            raise ReciprocalRequestError(acting_username, target_username)
        connection_crud.create_connection_request(
            session=session,
            sender_id=acting.id,
            receiver_id=target.id,
        )
        session.commit()
    except AppError:
        session.rollback()
        raise
    except IntegrityError as e:
        session.rollback()
        raise DuplicateRequestError(acting_username, target_username) from e
    except DBAPIError as e:
        session.rollback()
        raise StoreUnavailableError from e
    except Exception as e:
        session.rollback()
        raise AppError from e
    logger.info("Connection request sent: %s -> %s", acting_username, target_username)
    return Message(message="Connection request sent successfully.")


def accept_request(
    *,
    session: Session,
    acting_username: str,
    requester_username: str,
) -> ConnectionPair:
    """
    Accept the connection request the requester sent to the acting user.

    Consumes the request and creates both directions of the connection in one
    transaction.

    Raises:
        SelfReferenceError: If the acting user names themselves.
        UserNotFound: If either user does not exist.
        NoSuchRequestError: If the requester has no pending request to the acting user.
        AlreadyConnectedError: If a concurrent accept created the connection first.
        StoreUnavailableError: If the store fails; nothing is written.
        AppError: For any other (unexpected) errors.
    """
    if acting_username == requester_username:
        raise SelfReferenceError(acting_username)
    try:
        acting, requester = _lock_pair(
            session=session,
            acting_username=acting_username,
            other_username=requester_username,
        )
        consumed = connection_crud.delete_connection_request(
            session=session,
            sender_id=requester.id,
            receiver_id=acting.id,
        )
        if not consumed:
            raise NoSuchRequestError(requester_username, acting_username)
        # A request in the other direction is superseded by the connection.
        connection_crud.delete_connection_request(
            session=session,
            sender_id=acting.id,
            receiver_id=requester.id,
        )
        if not connection_crud.are_users_connected(
            session=session, user_id=acting.id, other_id=requester.id
        ):
            connection_crud.create_connection(
                session=session,
                user_id=acting.id,
                other_id=requester.id,
            )
        session.commit()
    except AppError:
        session.rollback()
        raise
    except IntegrityError as e:
        session.rollback()
        raise AlreadyConnectedError(acting_username, requester_username) from e
    except DBAPIError as e:
        session.rollback()
        raise StoreUnavailableError from e
    except Exception as e:
        session.rollback()
        raise AppError from e
    logger.info(
        "Connection request accepted: %s -> %s", requester_username, acting_username
    )
    return ConnectionPair(requester=requester_username, recipient=acting_username)


def delete_request(
    *,
    session: Session,
    acting_username: str,
    other_username: str,
) -> Message:
    """
    Reject an incoming request or cancel an outgoing one between the two users.

    Removing a request that does not exist succeeds without changes, so the
    call is safe to retry.

    Raises:
        SelfReferenceError: If the acting user names themselves.
        UserNotFound: If either user does not exist.
        StoreUnavailableError: If the store fails; nothing is written.
        AppError: For any other (unexpected) errors.
    """
    if acting_username == other_username:
        raise SelfReferenceError(acting_username)
    try:
        acting, other = _lock_pair(
            session=session,
            acting_username=acting_username,
            other_username=other_username,
        )
        cancelled = connection_crud.delete_connection_request(
            session=session,
            sender_id=acting.id,
            receiver_id=other.id,
        )
        rejected = connection_crud.delete_connection_request(
            session=session,
            sender_id=other.id,
            receiver_id=acting.id,
        )
        session.commit()
    except AppError:
        session.rollback()
        raise
    except DBAPIError as e:
        session.rollback()
        raise StoreUnavailableError from e
    except Exception as e:
        session.rollback()
        raise AppError from e
    if cancelled or rejected:
        logger.info(
            "Connection request deleted between %s and %s",
            acting_username,
            other_username,
        )
    else:
        logger.debug(
            "No connection request between %s and %s", acting_username, other_username
        )
    return Message(message="Connection request deleted successfully.")


def remove_connection(
    *,
    session: Session,
    acting_username: str,
    other_username: str,
) -> Message:
    """
    Remove the connection between the two users, in both directions.
    Removing a connection that does not exist succeeds without changes.

    Raises:
        SelfReferenceError: If the acting user names themselves.
        UserNotFound: If either user does not exist.
        StoreUnavailableError: If the store fails; nothing is written.
        AppError: For any other (unexpected) errors.
    """
    if acting_username == other_username:
        raise SelfReferenceError(acting_username)
    try:
        acting, other = _lock_pair(
            session=session,
            acting_username=acting_username,
            other_username=other_username,
        )
        removed = connection_crud.delete_connection(
            session=session,
            user_id=acting.id,
            other_id=other.id,
        )
        session.commit()
    except AppError:
        session.rollback()
        raise
    except DBAPIError as e:
        session.rollback()
        raise StoreUnavailableError from e
    except Exception as e:
        session.rollback()
        raise AppError from e
    if removed:
        logger.info("Connection removed: %s <-> %s", acting_username, other_username)
    return Message(message="Connection removed successfully.")


def suggest_connections(
    *,
    session: Session,
    acting_username: str,
    limit: int | None = None,
) -> list[UserSummary]:
    """
    Suggest users the acting user has no connection or request with.

    Parameters:
        limit (int | None): Maximum number of suggestions. Defaults to
            SUGGESTIONS_DEFAULT_LIMIT and is capped at SUGGESTIONS_MAX_LIMIT.
            Values <= 0 return an empty list.
    Raises:
        UserNotFound: If the acting user does not exist.
        StoreUnavailableError: If the store fails.
    """
    if limit is None:
        limit = settings.SUGGESTIONS_DEFAULT_LIMIT
    if limit <= 0:
        return []
    limit = min(limit, settings.SUGGESTIONS_MAX_LIMIT)
    with _read_errors():
        acting = _get_user(session=session, username=acting_username)
        users = connection_crud.get_suggestions(
            session=session, user_id=acting.id, limit=limit
        )
    return [user_converters.to_summary(user) for user in users]


def get_connections(*, session: Session, acting_username: str) -> list[str]:
    with _read_errors():
        acting = _get_user(session=session, username=acting_username)
        return connection_crud.get_connection_usernames(
            session=session, user_id=acting.id
        )


def get_pending_requests(*, session: Session, acting_username: str) -> list[str]:
    with _read_errors():
        acting = _get_user(session=session, username=acting_username)
        return connection_crud.get_pending_request_usernames(
            session=session, user_id=acting.id
        )


def get_connection_requests(*, session: Session, acting_username: str) -> list[str]:
    with _read_errors():
        acting = _get_user(session=session, username=acting_username)
        return connection_crud.get_connection_request_usernames(
            session=session, user_id=acting.id
        )


def get_connection_status(
    *,
    session: Session,
    acting_username: str,
    other_username: str,
) -> ConnectionStatusPublic:
    """
    Describe the relationship between the acting user and another user.
    Raises:
        UserNotFound: If either user does not exist.
    """
    with _read_errors():
        acting = _get_user(session=session, username=acting_username)
        if acting_username == other_username:
            return ConnectionStatusPublic(
                username=other_username, status=ConnectionStatus.SELF
            )
        other = _get_user(session=session, username=other_username)
        if connection_crud.are_users_connected(
            session=session, user_id=acting.id, other_id=other.id
        ):
            status = ConnectionStatus.CONNECTED
        elif connection_crud.has_sent_connection_request(
            session=session, sender_id=acting.id, receiver_id=other.id
        ):
            status = ConnectionStatus.PENDING
        elif connection_crud.has_sent_connection_request(
            session=session, sender_id=other.id, receiver_id=acting.id
        ):
            status = ConnectionStatus.REQUESTED
        else:
            status = ConnectionStatus.NONE
    return ConnectionStatusPublic(username=other_username, status=status)
