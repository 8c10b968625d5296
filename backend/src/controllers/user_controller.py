"""User CRUD operations."""

from typing import List

from backend.src.errors import ResourceNotFoundError
from backend.src.models.user import UserCreate, UserResponse, UserUpdate
from backend.src.repositories.user_repo import UserRepository
from backend.src.services.auth_service import AuthService


async def create_user(
    payload: UserCreate,
    user_repo: UserRepository,
    auth_service: AuthService,
) -> UserResponse:
    auth_service.check_password_policy(payload.password)
    user = await user_repo.create_user(
        name=payload.name,
        email=payload.email,
        password_hash=auth_service.hash_password(payload.password),
        phone=payload.phone,
    )
    return UserResponse.from_document(user)


async def list_users(user_repo: UserRepository, limit: int, offset: int) -> List[UserResponse]:
    users = await user_repo.list_users(limit=limit, offset=offset)
    return [UserResponse.from_document(user) for user in users]


async def get_user(user_id: str, user_repo: UserRepository) -> UserResponse:
    user = await user_repo.get_user_by_id(user_id)
    if user is None:
        raise ResourceNotFoundError("User not found.")
    return UserResponse.from_document(user)


async def update_user(
    user_id: str,
    payload: UserUpdate,
    user_repo: UserRepository,
    auth_service: AuthService,
) -> UserResponse:
    changes = payload.model_dump(exclude_unset=True, exclude={"password"})
    if payload.password is not None:
        auth_service.check_password_policy(payload.password)
        changes["password_hash"] = auth_service.hash_password(payload.password)

    user = await user_repo.update_user(user_id, changes)
    if user is None:
        raise ResourceNotFoundError("User not found.")
    return UserResponse.from_document(user)


async def delete_user(user_id: str, user_repo: UserRepository) -> None:
    if not await user_repo.delete_user(user_id):
        raise ResourceNotFoundError("User not found.")
