"""
Pydantic schemas for Expense entity.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from decimal import Decimal
from app.models.expense import SplitType


class SplitInput(BaseModel):
    """One participant's part of an expense as supplied by the client."""
    participant_id: int
    amount: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)  # For CUSTOM splits
    percentage: Optional[Decimal] = Field(None, ge=0, le=100)  # For PERCENTAGE splits


class ExpenseCreate(BaseModel):
    """Schema for expense creation."""
    paid_by_participant_id: int
    description: str = Field(..., min_length=1)
    amount: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    split_type: SplitType
    splits: List[SplitInput] = Field(..., min_length=1)


class ExpenseSplitResponse(BaseModel):
    """Schema for expense split response."""
    id: int
    participant_id: int
    amount: Decimal
    percentage: Optional[Decimal] = None

    class Config:
        from_attributes = True


class ExpenseResponse(BaseModel):
    """Schema for expense response."""
    id: int
    trip_id: int
    paid_by_participant_id: int
    description: str
    amount: Decimal
    split_type: SplitType
    splits: List[ExpenseSplitResponse] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
