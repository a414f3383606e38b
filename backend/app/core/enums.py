from enum import Enum, unique


@unique
class ConnectionStatus(str, Enum):
    SELF = "self"
    CONNECTED = "connected"
    PENDING = "pending"  # the current user sent a request
    REQUESTED = "requested"  # the other user sent a request
    NONE = "none"
