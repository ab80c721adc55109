"""User endpoints."""

from fastapi import APIRouter, Depends
from starlette.status import HTTP_201_CREATED

from tmf_api.dependencies import get_user_service
from tmf_shared.models import ErrorResponse, User, UserCreate, UserCreated
from tmf_shared.services.user_service import UserService

router = APIRouter(tags=["users"])


@router.post(
    "/users",
    summary="Create user",
    response_model=UserCreated,
    status_code=HTTP_201_CREATED,
    responses={409: {"description": "User already exists", "model": ErrorResponse}},
)
async def create_user(
    body: UserCreate,
    service: UserService = Depends(get_user_service),
) -> UserCreated:
    return UserCreated(id=service.create_user(body).id)


@router.get("/users", summary="List users", response_model=list[User])
async def list_users(service: UserService = Depends(get_user_service)) -> list[User]:
    return service.list_users()
