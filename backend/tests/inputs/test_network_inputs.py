import pytest
from pydantic import ValidationError

from app.inputs.network import (
    AcceptRequestInput,
    DeleteRequestInput,
    RemoveConnectionInput,
    SendRequestInput,
)


def test_usernames_are_stripped():
    assert SendRequestInput(recipient_username="  bob ").recipient_username == "bob"
    assert AcceptRequestInput(requester_username="alice\n").requester_username == "alice"


@pytest.mark.parametrize(
    "model, field",
    [
        (SendRequestInput, "recipient_username"),
        (AcceptRequestInput, "requester_username"),
        (DeleteRequestInput, "username"),
        (RemoveConnectionInput, "username"),
    ],
)
@pytest.mark.parametrize("value", ["", "   ", "x" * 65])
def test_invalid_usernames(model, field, value):
    with pytest.raises(ValidationError):
        model(**{field: value})


def test_missing_field():
    with pytest.raises(ValidationError):
        DeleteRequestInput()
