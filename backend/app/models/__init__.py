from .user import *
from .auth_schemas import *
from .connection import Connection, ConnectionRequest

__all__ = [
    "User",
    "UserBase",
    "UserCreate",
    "UserRegister",
    "Connection",
    "ConnectionRequest",
    "LoginRequest",
    "Message",
    "Token",
    "TokenPayload",
]
