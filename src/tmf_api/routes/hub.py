"""Listener (hub) endpoints for event subscription."""

from fastapi import APIRouter, Depends, Response
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from tmf_api.dependencies import get_listener_service
from tmf_shared.models import ErrorResponse, ListenerCreate, ListenerCreated
from tmf_shared.services.listener_service import ListenerService

router = APIRouter(tags=["hub"])


@router.post(
    "/hub",
    summary="Register listener",
    description="Register a callback URL for PaymentMethod events. Callbacks are unique.",
    response_model=ListenerCreated,
    status_code=HTTP_201_CREATED,
    responses={
        400: {"description": "callback missing", "model": ErrorResponse},
        409: {"description": "callback already registered", "model": ErrorResponse},
    },
)
async def register_listener(
    body: ListenerCreate,
    service: ListenerService = Depends(get_listener_service),
) -> ListenerCreated:
    listener = service.register(body)
    return ListenerCreated(id=listener.id, callback=listener.callback)


@router.delete(
    "/hub/{listener_id}",
    summary="Deregister listener",
    status_code=HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"description": "Listener not found", "model": ErrorResponse}},
)
async def deregister_listener(
    listener_id: str,
    service: ListenerService = Depends(get_listener_service),
) -> Response:
    service.deregister(listener_id)
    return Response(status_code=HTTP_204_NO_CONTENT)
