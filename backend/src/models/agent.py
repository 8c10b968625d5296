"""
Agent models.

Agents are people who run errands. They are created by an operator
(``/create``) or sign themselves up (``/register``), and can be looked up
by proximity to a point.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, model_validator

from backend.src.models.common import GeoPoint, utc_now


class _Coordinates(BaseModel):
    latitude: Optional[float] = Field(None, ge=-90, le=90, description="Latitude in degrees")
    longitude: Optional[float] = Field(None, ge=-180, le=180, description="Longitude in degrees")

    @model_validator(mode="after")
    def check_coordinate_pair(self):
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must be provided together")
        return self

    def to_point(self) -> Optional[GeoPoint]:
        if self.latitude is None or self.longitude is None:
            return None
        return GeoPoint.from_lat_lng(self.latitude, self.longitude)


# ============================================================================
# Stored Document
# ============================================================================


class AgentDocument(BaseModel):
    """Agent as stored in the ``agents`` collection."""

    id: Optional[str] = None
    name: str
    phone: str
    email: Optional[str] = None
    verified: bool = False
    location: Optional[GeoPoint] = None
    password_hash: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)


# ============================================================================
# Requests
# ============================================================================


class AgentCreate(_Coordinates):
    """Operator-side agent creation."""

    name: str = Field(..., min_length=1, max_length=100)
    phone: str = Field(..., min_length=3, max_length=30)
    email: Optional[EmailStr] = None
    verified: bool = False

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Ama Mensah",
                "phone": "+233201234567",
                "verified": True,
                "latitude": 5.6037,
                "longitude": -0.1870
            }
        }
    }


class AgentRegister(_Coordinates):
    """Agent self-registration. New agents always start unverified."""

    name: str = Field(..., min_length=1, max_length=100)
    phone: str = Field(..., min_length=3, max_length=30)
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


# ============================================================================
# Responses
# ============================================================================


class AgentResponse(BaseModel):
    """Agent details returned to clients (never includes credentials)."""

    id: str
    name: str
    phone: str
    email: Optional[str] = None
    verified: bool
    location: Optional[GeoPoint] = None
    created_at: datetime

    @classmethod
    def from_document(cls, agent: AgentDocument) -> "AgentResponse":
        return cls.model_validate(agent.model_dump(exclude={"password_hash"}))
