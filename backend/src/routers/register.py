"""Registration route (mounted at ``/api/register``)."""

from fastapi import APIRouter, Depends, status

from backend.src.controllers import register_controller
from backend.src.dependencies import get_auth_service, get_user_repository
from backend.src.models.auth import RegisterRequest
from backend.src.models.common import ErrorResponse
from backend.src.models.user import UserResponse
from backend.src.repositories.user_repo import UserRepository
from backend.src.routers.guard import route_guard
from backend.src.services.auth_service import AuthService

router = APIRouter(prefix="/api/register", tags=["Authentication"])


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register",
    responses={
        409: {"model": ErrorResponse, "description": "Email already registered"},
        500: {"model": ErrorResponse, "description": "Unexpected failure"}
    }
)
@route_guard("Something went wrong during registration.")
async def register(
    payload: RegisterRequest,
    user_repo: UserRepository = Depends(get_user_repository),
    auth_service: AuthService = Depends(get_auth_service)
) -> UserResponse:
    return await register_controller.register_user(payload, user_repo, auth_service)
