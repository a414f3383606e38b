from sqlmodel import Session, col, or_, select

from app.core.security import get_password_hash, verify_password
from app.models.user import User, UserCreate

__all__ = [
    "get_user_by_username",
    "get_user_by_email",
    "get_users_for_update",
    "create_user",
    "authenticate",
]


def get_user_by_username(*, session: Session, username: str) -> User | None:
    """
    Get a user by their username.

    Parameters:
        session (Session): The database session.
        username (str): The username of the user to retrieve.
    Returns:
        User | None: The user object if found, otherwise None.
    """
    statement = select(User).where(User.username == username)
    return session.exec(statement).one_or_none()


def get_user_by_email(*, session: Session, email: str) -> User | None:
    statement = select(User).where(User.email == email)
    return session.exec(statement).one_or_none()


def get_users_for_update(
    *,
    session: Session,
    usernames: list[str],
) -> dict[str, User]:
    """
    Load and row-lock the users with the given usernames.

    Rows are locked in username order so two transactions touching the same
    pair of users always acquire their locks in the same order.

    Parameters:
        session (Session): The database session.
        usernames (list[str]): The usernames to lock.
    Returns:
        dict[str, User]: The users that exist, keyed by username.
    """
    statement = (
        select(User)
        .where(col(User.username).in_(sorted(set(usernames))))
        .order_by(col(User.username))
        .with_for_update()
    )
    users = session.exec(statement).all()
    return {user.username: user for user in users}


def create_user(
    *,
    session: Session,
    user_create: UserCreate,
) -> User:
    """
    Create a new user in the database.
    Parameters:
        session (Session): The database session.
        user_create (UserCreate): The user creation data.
    Returns:
        User: The created user object.
    Raises:
        IntegrityError: If a user with the same username or email already exists.
    """
    db_obj = User.model_validate(
        user_create, update={"hashed_password": get_password_hash(user_create.password)}
    )
    session.add(db_obj)
    session.flush()  # Check for unique constraints
    return db_obj


def authenticate(*, session: Session, identifier: str, password: str) -> User | None:
    """
    Authenticate a user by username or email and password.

    Parameters:
        session (Session): The database session.
        identifier (str): The username or the email address of the user.
        password (str): The password of the user.
    Returns:
        User | None: The authenticated user object if credentials are valid, otherwise None.
    """
    statement = select(User).where(
        or_(User.username == identifier, User.email == identifier)
    )
    db_user = session.exec(statement).first()
    if not db_user:
        return None
    if not verify_password(password, db_user.hashed_password):
        return None
    return db_user
