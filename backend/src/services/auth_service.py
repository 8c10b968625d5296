"""
Credential service for registration and login.

Provides:
- Password policy check, hashing and verification (passlib)
- Access token issuance (python-jose)

Tokens are only issued; no endpoint of this service validates them.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import structlog
from jose import jwt
from passlib.context import CryptContext

from backend.src.config import Settings
from backend.src.errors import ErrandError

logger = structlog.get_logger(__name__)


class AuthService:
    """Hashes credentials and signs access tokens."""

    def __init__(self, settings: Settings):
        """
        Initialize auth service.

        Args:
            settings: Application settings (token secret, password policy)
        """
        self.settings = settings
        self.pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

    def check_password_policy(self, password: str) -> None:
        """
        Enforce the minimum password length.

        Raises:
            ErrandError: If the password is too short
        """
        if len(password) < self.settings.password_min_length:
            raise ErrandError(
                f"Password must be at least {self.settings.password_min_length} characters long."
            )

    def hash_password(self, password: str) -> str:
        """
        Hash a password.

        Args:
            password: Plain text password

        Returns:
            Hashed password
        """
        return self.pwd_context.hash(password)

    def verify_password(self, plain_password: str, hashed_password: Optional[str]) -> bool:
        """
        Verify a password against its hash.

        Returns:
            True if password matches, False otherwise (including missing or
            unrecognised hashes)
        """
        if not hashed_password:
            return False
        try:
            return self.pwd_context.verify(plain_password, hashed_password)
        except ValueError as e:
            logger.warning("password_hash_unrecognized", error=str(e))
            return False

    @property
    def token_lifetime_seconds(self) -> int:
        return self.settings.jwt_access_token_expire_minutes * 60

    def create_access_token(self, subject: str, email: str) -> str:
        """
        Create a signed access token.

        Args:
            subject: User ID
            email: User email, carried as a claim

        Returns:
            Encoded JWT
        """
        now = datetime.now(timezone.utc)
        payload = {
            "sub": subject,
            "email": email,
            "iat": now,
            "exp": now + timedelta(seconds=self.token_lifetime_seconds),
        }
        token = jwt.encode(payload, self.settings.jwt_secret_key, algorithm=self.settings.jwt_algorithm)
        logger.debug("access_token_created", user_id=subject)
        return token
