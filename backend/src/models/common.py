"""Schemas shared by several resources."""

from datetime import datetime, timezone
from typing import List, Literal

from pydantic import BaseModel, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class GeoPoint(BaseModel):
    """GeoJSON point. Coordinates are ordered [longitude, latitude]."""

    type: Literal["Point"] = "Point"
    coordinates: List[float] = Field(..., min_length=2, max_length=2)

    @classmethod
    def from_lat_lng(cls, latitude: float, longitude: float) -> "GeoPoint":
        return cls(coordinates=[longitude, latitude])


class ErrorResponse(BaseModel):
    """Error envelope returned by every failing route."""

    error: str = Field(..., min_length=1, description="Human readable failure message")

    model_config = {
        "json_schema_extra": {
            "example": {"error": "Failed to retrieve agents."}
        }
    }
