from sqlmodel import Field, SQLModel

__all__ = [
    "LoginRequest",
    "Message",
    "Token",
    "TokenPayload",
]


class LoginRequest(SQLModel):
    identifier: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=255)


# Generic message
class Message(SQLModel):
    message: str


# JSON payload containing access token
class Token(SQLModel):
    access_token: str
    token_type: str = Field(
        default="bearer", description="Type of the token, usually 'bearer'"
    )


# Contents of JWT token
class TokenPayload(SQLModel):
    sub: str | None = Field(
        default=None, description="Subject of the token, the username"
    )
