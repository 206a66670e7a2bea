"""
Participant model for people sharing a trip's expenses.
"""
from sqlalchemy import Column, String, ForeignKey, Integer
from sqlalchemy.orm import relationship
from app.db.base import BaseModel


class Participant(BaseModel):
    """A person who can pay for and owe shares of expenses within one trip."""
    __tablename__ = "participants"

    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=True)

    # Relationships
    trip = relationship("Trip", back_populates="participants")
    # Dependent rows are removed explicitly or through the trip cascade
    expenses_paid = relationship("Expense", back_populates="paid_by", passive_deletes="all")
    splits = relationship("ExpenseSplit", back_populates="participant", passive_deletes="all")
