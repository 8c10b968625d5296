"""Login route (mounted at ``/api/login``)."""

from fastapi import APIRouter, Depends

from backend.src.controllers import login_controller
from backend.src.dependencies import get_auth_service, get_user_repository
from backend.src.models.auth import LoginRequest, LoginResponse
from backend.src.models.common import ErrorResponse
from backend.src.repositories.user_repo import UserRepository
from backend.src.routers.guard import route_guard
from backend.src.services.auth_service import AuthService

router = APIRouter(prefix="/api/login", tags=["Authentication"])


@router.post(
    "",
    response_model=LoginResponse,
    summary="Login",
    responses={
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
        500: {"model": ErrorResponse, "description": "Unexpected failure"}
    }
)
@route_guard("Something went wrong during login.")
async def login(
    payload: LoginRequest,
    user_repo: UserRepository = Depends(get_user_repository),
    auth_service: AuthService = Depends(get_auth_service)
) -> LoginResponse:
    return await login_controller.login(payload, user_repo, auth_service)
