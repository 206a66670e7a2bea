"""
Pydantic schemas for computed trip balances and suggested settlements.
"""
from pydantic import BaseModel
from typing import List
from decimal import Decimal


class ParticipantBalance(BaseModel):
    """Net position of one participant (positive = is owed, negative = owes)."""
    participant_id: int
    participant_name: str
    balance: Decimal


class Settlement(BaseModel):
    """Suggested payment from a debtor to a creditor."""
    from_participant: str
    to_participant: str
    amount: Decimal


class TripBalances(BaseModel):
    """Balances and settlements of a trip, derived on demand."""
    trip_id: int
    balances: List[ParticipantBalance]
    settlements: List[Settlement]
