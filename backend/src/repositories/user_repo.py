"""
User repository for database operations.

Provides async CRUD operations for users on the mapped MongoDB handle.
Email uniqueness is checked here before inserts and email changes and is
enforced by a unique index created at startup.
"""

from typing import Any, Dict, List, Optional

import structlog
from pymongo import ASCENDING, IndexModel
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError

from backend.src.errors import ConflictError
from backend.src.models.common import utc_now
from backend.src.models.user import UserDocument
from backend.src.repositories.base import DocumentCollection

logger = structlog.get_logger(__name__)


class UserRepository:
    """Repository for user database operations."""

    collection_name = "users"

    indexes = [IndexModel([("email", ASCENDING)], unique=True, name="users_email_unique")]

    def __init__(self, database: AsyncDatabase):
        """
        Initialize user repository.

        Args:
            database: Mapped database handle
        """
        self.users = DocumentCollection(database[self.collection_name], UserDocument)

    async def create_user(
        self,
        name: str,
        email: str,
        password_hash: str,
        phone: Optional[str] = None
    ) -> UserDocument:
        """
        Create a new user.

        Args:
            name: Display name
            email: Email address
            password_hash: Hashed password
            phone: Phone number (optional)

        Returns:
            Created user

        Raises:
            ConflictError: If the email is already registered
        """
        if await self.get_user_by_email(email) is not None:
            logger.warning("email_already_exists", email=email)
            raise ConflictError(f"A user with email '{email}' already exists.")

        try:
            user = await self.users.insert(
                UserDocument(name=name, email=email, phone=phone, password_hash=password_hash)
            )
        except DuplicateKeyError as e:
            logger.warning("email_already_exists", email=email)
            raise ConflictError(f"A user with email '{email}' already exists.") from e
        except Exception as e:
            logger.error("user_create_failed", error=str(e), email=email)
            raise

        logger.info("user_created", user_id=user.id, email=email)
        return user

    async def get_user_by_id(self, user_id: str) -> Optional[UserDocument]:
        user = await self.users.get(user_id)
        if user is None:
            logger.debug("user_not_found", user_id=user_id)
        return user

    async def get_user_by_email(self, email: str) -> Optional[UserDocument]:
        return await self.users.find_one({"email": email})

    async def update_user(self, user_id: str, changes: Dict[str, Any]) -> Optional[UserDocument]:
        """
        Update user information.

        Args:
            user_id: User ID
            changes: Field values to set (already hashed where needed)

        Returns:
            Updated user or None if not found

        Raises:
            ConflictError: If the new email belongs to another user
        """
        email = changes.get("email")
        if email is not None:
            existing = await self.get_user_by_email(email)
            if existing is not None and existing.id != user_id:
                logger.warning("email_already_exists", email=email)
                raise ConflictError(f"A user with email '{email}' already exists.")

        try:
            user = await self.users.update(user_id, {**changes, "updated_at": utc_now()})
        except DuplicateKeyError as e:
            logger.warning("email_already_exists", email=email)
            raise ConflictError(f"A user with email '{email}' already exists.") from e
        if user is None:
            logger.debug("user_not_found", user_id=user_id)
            return None

        logger.info("user_updated", user_id=user_id, fields=sorted(changes))
        return user

    async def delete_user(self, user_id: str) -> bool:
        deleted = await self.users.delete(user_id)
        if deleted:
            logger.info("user_deleted", user_id=user_id)
        else:
            logger.debug("user_not_found", user_id=user_id)
        return deleted

    async def list_users(self, limit: int = 100, offset: int = 0) -> List[UserDocument]:
        """List users, newest first."""
        return await self.users.find(limit=limit, skip=offset, sort=[("created_at", -1)])

    async def count_users(self) -> int:
        return await self.users.count()
