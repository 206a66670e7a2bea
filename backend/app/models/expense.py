"""
Expense model for tracking spending.
"""
from sqlalchemy import Column, Numeric, ForeignKey, Integer, Text, Enum as SQLEnum
from sqlalchemy.orm import relationship
from app.db.base import BaseModel
import enum


class SplitType(str, enum.Enum):
    """How an expense amount is divided between participants."""
    EQUAL = "EQUAL"
    PERCENTAGE = "PERCENTAGE"
    CUSTOM = "CUSTOM"


class Expense(BaseModel):
    """Expense model representing a single spending event."""
    __tablename__ = "expenses"

    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    paid_by_participant_id = Column(Integer, ForeignKey("participants.id"), nullable=False, index=True)
    description = Column(Text, nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    split_type = Column(SQLEnum(SplitType), nullable=False)

    # Relationships
    trip = relationship("Trip", back_populates="expenses")
    paid_by = relationship("Participant", back_populates="expenses_paid")
    splits = relationship(
        "ExpenseSplit", back_populates="expense",
        cascade="all, delete-orphan", order_by="ExpenseSplit.id"
    )


class ExpenseSplit(BaseModel):
    """Share of one expense allocated to one participant."""
    __tablename__ = "expense_splits"

    expense_id = Column(Integer, ForeignKey("expenses.id"), nullable=False, index=True)
    participant_id = Column(Integer, ForeignKey("participants.id"), nullable=False, index=True)
    amount = Column(Numeric(10, 2), nullable=False)
    percentage = Column(Numeric(5, 2), nullable=True)  # Only set for PERCENTAGE splits

    # Relationships
    expense = relationship("Expense", back_populates="splits")
    participant = relationship("Participant", back_populates="splits")
