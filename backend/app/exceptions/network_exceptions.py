from fastapi import status

from .base import AppError


class SelfReferenceError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, username: str):
        detail = f"User {username} cannot connect with themselves."
        super().__init__(detail)


class AlreadyConnectedError(AppError):
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, username: str, other_username: str):
        detail = f"Already connected. User {username} is already connected with user {other_username}."
        super().__init__(detail)


class DuplicateRequestError(AppError):
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, sender: str, receiver: str):
        detail = f"Connection request already sent. User {sender} has already requested a connection with user {receiver}."
        super().__init__(detail)


class ReciprocalRequestError(AppError):
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, sender: str, receiver: str):
        detail = f"User {receiver} has already requested a connection with user {sender}. Accept that request instead."
        super().__init__(detail)


class NoSuchRequestError(AppError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, sender: str, receiver: str):
        detail = f"Connection request not found. User {sender} has not requested a connection with user {receiver}."
        super().__init__(detail)


class StoreUnavailableError(AppError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    detail = "The user store is unavailable. No changes were applied."
