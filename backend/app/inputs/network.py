# app/inputs/network.py

from pydantic import BaseModel, Field, field_validator


class _UsernameInput(BaseModel):
    @field_validator("*", mode="before")
    @classmethod
    def strip_whitespace(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value


class SendRequestInput(_UsernameInput):
    recipient_username: str = Field(min_length=1, max_length=64)


class AcceptRequestInput(_UsernameInput):
    requester_username: str = Field(min_length=1, max_length=64)


class DeleteRequestInput(_UsernameInput):
    username: str = Field(min_length=1, max_length=64)


class RemoveConnectionInput(_UsernameInput):
    username: str = Field(min_length=1, max_length=64)
