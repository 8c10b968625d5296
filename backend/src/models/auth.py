"""
Registration and login schemas.

Login issues an access token; validating tokens on later requests is not
part of this service.
"""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from backend.src.models.user import UserResponse


class RegisterRequest(BaseModel):
    """Registration request schema."""

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)
    phone: Optional[str] = Field(None, min_length=3, max_length=30)

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Kofi Boateng",
                "email": "kofi@example.com",
                "password": "SecurePassword123!"
            }
        }
    }


class LoginRequest(BaseModel):
    """Login request schema."""

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)

    model_config = {
        "json_schema_extra": {
            "example": {
                "email": "kofi@example.com",
                "password": "SecurePassword123!"
            }
        }
    }


class LoginResponse(BaseModel):
    """Successful login: the user's profile plus a signed access token."""

    message: str = "Login successful."
    user: UserResponse
    access_token: str = Field(..., min_length=10)
    token_type: str = "bearer"
    expires_in: int = Field(..., gt=0, description="Token lifetime in seconds")
