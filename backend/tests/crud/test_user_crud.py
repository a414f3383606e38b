import pytest
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from app.crud import user as user_crud
from app.models.user import User, UserCreate
from tests.fixtures.factories import DEFAULT_PASSWORD


def test_create_user(db_transaction: Session):
    user_in = UserCreate(
        username="carol",
        email="carol@example.com",
        password="s3cret",
        name="Carol",
    )

    user = user_crud.create_user(session=db_transaction, user_create=user_in)

    assert user.username == "carol"
    assert user.hashed_password != "s3cret"
    assert user_crud.get_user_by_username(session=db_transaction, username="carol")


def test_create_user_duplicate_username(db_transaction: Session, alice: User):
    user_in = UserCreate(
        username="alice", email="other@example.com", password="s3cret"
    )

    with pytest.raises(IntegrityError):
        user_crud.create_user(session=db_transaction, user_create=user_in)


@pytest.mark.parametrize("identifier", ["alice", "alice@example.com"])
def test_authenticate(db_transaction: Session, alice: User, identifier: str):
    user = user_crud.authenticate(
        session=db_transaction, identifier=identifier, password=DEFAULT_PASSWORD
    )

    assert user is not None
    assert user.id == alice.id


def test_authenticate_wrong_password(db_transaction: Session, alice: User):
    assert (
        user_crud.authenticate(
            session=db_transaction, identifier="alice", password="nope"
        )
        is None
    )
    assert (
        user_crud.authenticate(
            session=db_transaction, identifier="nobody", password=DEFAULT_PASSWORD
        )
        is None
    )
