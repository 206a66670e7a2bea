"""
Pydantic schemas for Trip entity.
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from app.models.trip import Currency


class TripBase(BaseModel):
    """Base trip schema."""
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    currency: Currency


class TripCreate(TripBase):
    """Schema for trip creation."""
    currency: Optional[Currency] = None  # Falls back to DEFAULT_CURRENCY


class TripUpdate(BaseModel):
    """Schema for trip update."""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    currency: Optional[Currency] = None


class TripResponse(TripBase):
    """Schema for trip response."""
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
