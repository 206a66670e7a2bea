"""
Pydantic schemas for Participant entity.
"""
from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime


class ParticipantCreate(BaseModel):
    """Schema for adding a participant to a trip."""
    name: str = Field(..., min_length=1)
    email: Optional[EmailStr] = None


class ParticipantResponse(BaseModel):
    """Schema for participant response."""
    id: int
    trip_id: int
    name: str
    email: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True
