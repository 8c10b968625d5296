"""User self-registration."""

import structlog

from backend.src.models.auth import RegisterRequest
from backend.src.models.user import UserResponse
from backend.src.repositories.user_repo import UserRepository
from backend.src.services.auth_service import AuthService

logger = structlog.get_logger(__name__)


async def register_user(
    payload: RegisterRequest,
    user_repo: UserRepository,
    auth_service: AuthService,
) -> UserResponse:
    """
    Create a user account from a registration form.

    Raises:
        ConflictError: If the email is already registered
        ErrandError: If the password is too short
    """
    auth_service.check_password_policy(payload.password)
    user = await user_repo.create_user(
        name=payload.name,
        email=payload.email,
        password_hash=auth_service.hash_password(payload.password),
        phone=payload.phone,
    )
    logger.info("user_registered", user_id=user.id)
    return UserResponse.from_document(user)
