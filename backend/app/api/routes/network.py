from fastapi import APIRouter, Query

from app.api.deps import CurrentUser, SessionDep
from app.core.config import settings
from app.inputs.network import (
    AcceptRequestInput,
    DeleteRequestInput,
    RemoveConnectionInput,
    SendRequestInput,
)
from app.models.auth_schemas import Message
from app.schemas.network import (
    ConnectionPair,
    ConnectionRequestsPublic,
    ConnectionsPublic,
    ConnectionStatusPublic,
    PendingRequestsPublic,
    SuggestionsPublic,
)
from app.services import network as network_service

router = APIRouter(prefix="/network", tags=["network"])


@router.post("/send-request")
def send_request(
    *, session: SessionDep, current_user: CurrentUser, request_in: SendRequestInput
) -> Message:
    return network_service.send_request(
        session=session,
        acting_username=current_user.username,
        target_username=request_in.recipient_username,
    )


@router.post("/accept-request")
def accept_request(
    *, session: SessionDep, current_user: CurrentUser, request_in: AcceptRequestInput
) -> ConnectionPair:
    return network_service.accept_request(
        session=session,
        acting_username=current_user.username,
        requester_username=request_in.requester_username,
    )


@router.delete("/delete-request")
def delete_request(
    *, session: SessionDep, current_user: CurrentUser, request_in: DeleteRequestInput
) -> Message:
    return network_service.delete_request(
        session=session,
        acting_username=current_user.username,
        other_username=request_in.username,
    )


@router.delete("/delete-connection")
def delete_connection(
    *,
    session: SessionDep,
    current_user: CurrentUser,
    request_in: RemoveConnectionInput,
) -> Message:
    return network_service.remove_connection(
        session=session,
        acting_username=current_user.username,
        other_username=request_in.username,
    )


@router.get("/connections")
def get_connections(
    *, session: SessionDep, current_user: CurrentUser
) -> ConnectionsPublic:
    connections = network_service.get_connections(
        session=session, acting_username=current_user.username
    )
    return ConnectionsPublic(connections=connections)


@router.get("/pending-requests")
def get_pending_requests(
    *, session: SessionDep, current_user: CurrentUser
) -> PendingRequestsPublic:
    pending = network_service.get_pending_requests(
        session=session, acting_username=current_user.username
    )
    return PendingRequestsPublic(pending_requests=pending)


@router.get("/connection-requests")
def get_connection_requests(
    *, session: SessionDep, current_user: CurrentUser
) -> ConnectionRequestsPublic:
    requests = network_service.get_connection_requests(
        session=session, acting_username=current_user.username
    )
    return ConnectionRequestsPublic(connection_requests=requests)


@router.get("/people-you-may-know")
def people_you_may_know(
    *,
    session: SessionDep,
    current_user: CurrentUser,
    limit: int = Query(settings.SUGGESTIONS_DEFAULT_LIMIT),
) -> SuggestionsPublic:
    suggestions = network_service.suggest_connections(
        session=session,
        acting_username=current_user.username,
        limit=limit,
    )
    return SuggestionsPublic(suggestions=suggestions)


@router.get("/status/{username}")
def get_connection_status(
    *, session: SessionDep, current_user: CurrentUser, username: str
) -> ConnectionStatusPublic:
    return network_service.get_connection_status(
        session=session,
        acting_username=current_user.username,
        other_username=username,
    )
