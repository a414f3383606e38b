from app.models.user import User
from app.schemas.user import UserPublic, UserSummary


def to_public(user: User) -> UserPublic:
    return UserPublic.model_validate(user)


def to_summary(user: User) -> UserSummary:
    return UserSummary.model_validate(user)
