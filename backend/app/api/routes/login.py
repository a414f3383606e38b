from fastapi import APIRouter

from app.api.deps import SessionDep
from app.models.auth_schemas import LoginRequest, Token
from app.services import users as users_service

router = APIRouter(tags=["login"])


@router.post("/login/access-token")
def login_access_token(*, session: SessionDep, login_in: LoginRequest) -> Token:
    """
    Exchange a username (or email) and password for a bearer token.
    """
    return users_service.login(
        session=session,
        identifier=login_in.identifier,
        password=login_in.password,
    )
