import pytest
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from app.crud import connection as connection_crud
from app.crud import user as user_crud
from app.models.connection import ConnectionRequest
from app.models.user import User


def test_create_connection_success(db_transaction: Session, alice: User, bob: User):
    assert not connection_crud.are_users_connected(
        session=db_transaction, user_id=alice.id, other_id=bob.id
    )

    connection_crud.create_connection(
        session=db_transaction, user_id=alice.id, other_id=bob.id
    )

    assert connection_crud.are_users_connected(
        session=db_transaction, user_id=alice.id, other_id=bob.id
    )
    assert connection_crud.are_users_connected(
        session=db_transaction, user_id=bob.id, other_id=alice.id
    )
    assert connection_crud.get_connection_usernames(
        session=db_transaction, user_id=alice.id
    ) == ["bob"]


def test_create_connection_twice(db_transaction: Session, alice: User, bob: User):
    connection_crud.create_connection(
        session=db_transaction, user_id=alice.id, other_id=bob.id
    )

    with pytest.raises(IntegrityError):
        connection_crud.create_connection(
            session=db_transaction, user_id=bob.id, other_id=alice.id
        )


def test_delete_connection(db_transaction: Session, alice: User, bob: User):
    connection_crud.create_connection(
        session=db_transaction, user_id=alice.id, other_id=bob.id
    )

    assert connection_crud.delete_connection(
        session=db_transaction, user_id=bob.id, other_id=alice.id
    )
    assert not connection_crud.are_users_connected(
        session=db_transaction, user_id=alice.id, other_id=bob.id
    )
    assert not connection_crud.are_users_connected(
        session=db_transaction, user_id=bob.id, other_id=alice.id
    )
    assert not connection_crud.delete_connection(
        session=db_transaction, user_id=bob.id, other_id=alice.id
    )


def test_connection_request_views(db_transaction: Session, alice: User, bob: User):
    connection_crud.create_connection_request(
        session=db_transaction, sender_id=alice.id, receiver_id=bob.id
    )

    assert connection_crud.has_sent_connection_request(
        session=db_transaction, sender_id=alice.id, receiver_id=bob.id
    )
    assert not connection_crud.has_sent_connection_request(
        session=db_transaction, sender_id=bob.id, receiver_id=alice.id
    )
    assert connection_crud.get_pending_request_usernames(
        session=db_transaction, user_id=alice.id
    ) == ["bob"]
    assert connection_crud.get_connection_request_usernames(
        session=db_transaction, user_id=bob.id
    ) == ["alice"]
    assert connection_crud.get_pending_request_usernames(
        session=db_transaction, user_id=bob.id
    ) == []


def test_create_connection_request_twice(
    db_transaction: Session, alice: User, bob: User
):
    connection_crud.create_connection_request(
        session=db_transaction, sender_id=alice.id, receiver_id=bob.id
    )

    with pytest.raises(IntegrityError):
        connection_crud.create_connection_request(
            session=db_transaction, sender_id=alice.id, receiver_id=bob.id
        )


def test_delete_connection_request(db_transaction: Session, alice: User, bob: User):
    connection_crud.create_connection_request(
        session=db_transaction, sender_id=alice.id, receiver_id=bob.id
    )

    assert not connection_crud.delete_connection_request(
        session=db_transaction, sender_id=bob.id, receiver_id=alice.id
    )
    assert connection_crud.delete_connection_request(
        session=db_transaction, sender_id=alice.id, receiver_id=bob.id
    )
    assert not connection_crud.has_sent_connection_request(
        session=db_transaction, sender_id=alice.id, receiver_id=bob.id
    )


def test_get_users_for_update(db_transaction: Session, alice: User, bob: User):
    users = user_crud.get_users_for_update(
        session=db_transaction, usernames=["bob", "alice", "ghost"]
    )

    assert set(users) == {"alice", "bob"}
    assert users["alice"].id == alice.id


def test_get_suggestions(db_transaction: Session, user_factory):
    alice = user_factory(username="alice", email="alice@example.com")
    bob = user_factory(username="bob", email="bob@example.com")
    carol = user_factory(username="carol", email="carol@example.com")
    dave = user_factory(username="dave", email="dave@example.com")
    erin = user_factory(username="erin", email="erin@example.com")

    connection_crud.create_connection(
        session=db_transaction, user_id=alice.id, other_id=bob.id
    )
    connection_crud.create_connection_request(
        session=db_transaction, sender_id=alice.id, receiver_id=carol.id
    )
    connection_crud.create_connection_request(
        session=db_transaction, sender_id=dave.id, receiver_id=alice.id
    )

    suggestions = connection_crud.get_suggestions(
        session=db_transaction, user_id=alice.id, limit=10
    )

    assert [user.id for user in suggestions] == [erin.id]


def test_incoming_requests_are_indexed():
    index_names = {index.name for index in ConnectionRequest.__table__.indexes}

    assert "ix_connectionrequest_receiver_id" in index_names
