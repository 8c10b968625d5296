"""User routes (mounted at ``/api/users``)."""

from typing import List

from fastapi import APIRouter, Depends, Response, status

from backend.src.controllers import user_controller
from backend.src.dependencies import PaginationParams, get_auth_service, get_user_repository
from backend.src.models.common import ErrorResponse
from backend.src.models.user import UserCreate, UserResponse, UserUpdate
from backend.src.repositories.user_repo import UserRepository
from backend.src.routers.guard import route_guard
from backend.src.services.auth_service import AuthService

router = APIRouter(
    prefix="/api/users",
    tags=["Users"],
    responses={
        404: {"model": ErrorResponse, "description": "Not Found"},
        500: {"model": ErrorResponse, "description": "Unexpected failure"}
    }
)


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create User",
    responses={409: {"model": ErrorResponse, "description": "Email already exists"}}
)
@route_guard("Failed to create user.")
async def create_user(
    payload: UserCreate,
    user_repo: UserRepository = Depends(get_user_repository),
    auth_service: AuthService = Depends(get_auth_service)
) -> UserResponse:
    return await user_controller.create_user(payload, user_repo, auth_service)


@router.get("", response_model=List[UserResponse], summary="List Users")
@route_guard("Failed to retrieve users.")
async def list_users(
    pagination: PaginationParams = Depends(),
    user_repo: UserRepository = Depends(get_user_repository)
) -> List[UserResponse]:
    return await user_controller.list_users(user_repo, pagination.limit, pagination.offset)


@router.get("/{user_id}", response_model=UserResponse, summary="Get User")
@route_guard("Failed to retrieve user.")
async def get_user(
    user_id: str,
    user_repo: UserRepository = Depends(get_user_repository)
) -> UserResponse:
    return await user_controller.get_user(user_id, user_repo)


@router.put("/{user_id}", response_model=UserResponse, summary="Update User")
@route_guard("Failed to update user.")
async def update_user(
    user_id: str,
    payload: UserUpdate,
    user_repo: UserRepository = Depends(get_user_repository),
    auth_service: AuthService = Depends(get_auth_service)
) -> UserResponse:
    return await user_controller.update_user(user_id, payload, user_repo, auth_service)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete User"
)
@route_guard("Failed to delete user.")
async def delete_user(
    user_id: str,
    user_repo: UserRepository = Depends(get_user_repository)
) -> None:
    await user_controller.delete_user(user_id, user_repo)
