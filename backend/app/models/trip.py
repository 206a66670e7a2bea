"""
Trip model for shared-expense tracking.
"""
from sqlalchemy import Column, String, Text, Enum as SQLEnum
from sqlalchemy.orm import relationship
from app.db.base import BaseModel
import enum


class Currency(str, enum.Enum):
    """Supported trip currencies."""
    EUR = "EUR"
    USD = "USD"


class Trip(BaseModel):
    """Trip model grouping participants and expenses under one currency."""
    __tablename__ = "trips"

    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    currency = Column(SQLEnum(Currency), default=Currency.EUR, nullable=False)

    # Relationships
    participants = relationship(
        "Participant", back_populates="trip",
        cascade="all, delete-orphan", order_by="Participant.id"
    )
    expenses = relationship(
        "Expense", back_populates="trip",
        cascade="all, delete-orphan", order_by="Expense.id"
    )
