from fastapi import APIRouter

from app.api.deps import CurrentUser, SessionDep
from app.converters import user as user_converters
from app.models.user import UserRegister
from app.schemas.user import UserPublic
from app.services import users as users_service

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/signup", response_model=UserPublic)
def register_user(*, session: SessionDep, user_in: UserRegister) -> UserPublic:
    return users_service.register_user(
        session=session,
        user_in=user_in,
    )


@router.get("/me", response_model=UserPublic)
def read_user_me(current_user: CurrentUser) -> UserPublic:
    return user_converters.to_public(current_user)


@router.get("/{username}", response_model=UserPublic)
def read_user(
    *, session: SessionDep, _current_user: CurrentUser, username: str
) -> UserPublic:
    return users_service.get_user(session=session, username=username)
