"""Email/password login."""

import structlog

from backend.src.errors import InvalidCredentialsError
from backend.src.models.auth import LoginRequest, LoginResponse
from backend.src.models.user import UserResponse
from backend.src.repositories.user_repo import UserRepository
from backend.src.services.auth_service import AuthService

logger = structlog.get_logger(__name__)


async def login(
    payload: LoginRequest,
    user_repo: UserRepository,
    auth_service: AuthService,
) -> LoginResponse:
    """
    Check credentials and issue an access token.

    Unknown email and wrong password produce the same error.

    Raises:
        InvalidCredentialsError: If the credentials do not match a user
    """
    user = await user_repo.get_user_by_email(payload.email)
    if user is None or not auth_service.verify_password(payload.password, user.password_hash):
        logger.warning("login_failed", email=payload.email)
        raise InvalidCredentialsError()

    logger.info("login_success", user_id=user.id)
    return LoginResponse(
        user=UserResponse.from_document(user),
        access_token=auth_service.create_access_token(user.id, user.email),
        expires_in=auth_service.token_lifetime_seconds,
    )
