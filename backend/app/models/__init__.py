"""Models package - Import all models for SQLAlchemy registration."""
from app.models.trip import Trip, Currency
from app.models.participant import Participant
from app.models.expense import Expense, ExpenseSplit, SplitType

__all__ = [
    "Trip",
    "Currency",
    "Participant",
    "Expense",
    "ExpenseSplit",
    "SplitType",
]
