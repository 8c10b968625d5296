"""
User models.

Users post errands. The stored document keeps a password hash; every
response model omits it.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from backend.src.models.common import utc_now


class UserDocument(BaseModel):
    """User as stored in the ``users`` collection."""

    id: Optional[str] = None
    name: str
    email: str
    phone: Optional[str] = None
    password_hash: str
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: Optional[datetime] = None


class UserCreate(BaseModel):
    """Create user request schema."""

    name: str = Field(..., min_length=1, max_length=100, description="Display name")
    email: EmailStr = Field(..., description="Email address (unique)")
    password: str = Field(..., min_length=1, max_length=128, description="Password")
    phone: Optional[str] = Field(None, min_length=3, max_length=30)

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Kofi Boateng",
                "email": "kofi@example.com",
                "password": "SecurePassword123!",
                "phone": "+233241112223"
            }
        }
    }


class UserUpdate(BaseModel):
    """Update user request schema with optional fields."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=3, max_length=30)
    password: Optional[str] = Field(None, min_length=1, max_length=128)

    @field_validator("name", "email", "password")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class UserResponse(BaseModel):
    """User information returned to clients."""

    id: str
    name: str
    email: str
    phone: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, user: UserDocument) -> "UserResponse":
        return cls.model_validate(user.model_dump(exclude={"password_hash"}))
