from datetime import timedelta
from logging import getLogger

from psycopg.errors import UniqueViolation
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from app.converters import user as user_converters
from app.core import security
from app.core.config import settings
from app.crud import user as users_crud
from app.exceptions.base import AppError
from app.exceptions.user_exceptions import (
    EmailAlreadyExists,
    InactiveUser,
    InvalidCredentials,
    UsernameAlreadyExists,
    UserNotFound,
)
from app.models.auth_schemas import Token
from app.models.user import UserCreate, UserRegister
from app.schemas.user import UserPublic

logger = getLogger(__name__)


def get_user(*, session: Session, username: str) -> UserPublic:
    """
    Get a user by username.

    Raises:
        UserNotFound: If the user does not exist.
    """
    user = users_crud.get_user_by_username(session=session, username=username)
    if user is None:
        raise UserNotFound(username)
    return user_converters.to_public(user)


def _is_email_collision(
    *,
    session: Session,
    error: UniqueViolation,
    email: str,
) -> bool:
    constraint = error.diag.constraint_name or ""
    if "email" in constraint:
        return True
    if "username" in constraint:
        return False
    # No constraint name reported; look at what committed in the meantime.
    return users_crud.get_user_by_email(session=session, email=email) is not None


def register_user(
    *,
    session: Session,
    user_in: UserRegister,
) -> UserPublic:
    """
    Register a new user in the system.

    Parameters:
        session (Session): Database session.
        user_in (UserRegister): User registration data.
    Returns:
        UserPublic: The public representation of the newly created user.
    Raises:
        UsernameAlreadyExists: If a user with the given username already exists.
        EmailAlreadyExists: If a user with the given email already exists.
        AppError: If there is an error during user creation.
    """
    if users_crud.get_user_by_username(session=session, username=user_in.username):
        raise UsernameAlreadyExists(user_in.username)
    if users_crud.get_user_by_email(session=session, email=user_in.email):
        raise EmailAlreadyExists(user_in.email)

    user_create = UserCreate.model_validate(user_in)
    try:
        user = users_crud.create_user(
            session=session,
            user_create=user_create,
        )
        session.commit()
    except IntegrityError as e:
        session.rollback()
        if isinstance(e.orig, UniqueViolation):
            if _is_email_collision(session=session, error=e.orig, email=user_in.email):
                raise EmailAlreadyExists(user_in.email) from e
            raise UsernameAlreadyExists(user_in.username) from e
        else:
            raise AppError from e
    except Exception as e:
        session.rollback()
        raise AppError from e

    logger.info("Registered user %s", user.username)
    return user_converters.to_public(user)


def login(*, session: Session, identifier: str, password: str) -> Token:
    """
    Exchange a username (or email) and password for a bearer token.

    Raises:
        InvalidCredentials: If the credentials do not match a user.
        InactiveUser: If the user has been deactivated.
    """
    user = users_crud.authenticate(
        session=session, identifier=identifier, password=password
    )
    if user is None:
        raise InvalidCredentials()
    if not user.is_active:
        raise InactiveUser()
    access_token_expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return Token(
        access_token=security.create_access_token(
            user.username, expires_delta=access_token_expires
        )
    )
