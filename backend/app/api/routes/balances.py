"""
Trip balance routes.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.core.config import settings
from app.db.session import get_db
from app.schemas.balance import TripBalances
from app.services.balance_service import get_trip_balances, BalanceInconsistencyError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["balances"])


@router.get("/trips/{trip_id}/balances", response_model=TripBalances)
async def get_balances(
    trip_id: int,
    db: Session = Depends(get_db)
):
    """
    Get each participant's net balance and the payments that settle them.

    Positive balance = participant is owed money.
    Negative balance = participant owes money.
    A trip without participants, or an unknown trip, has empty lists.
    """
    try:
        return get_trip_balances(trip_id, db, tolerance=settings.SETTLEMENT_TOLERANCE)
    except BalanceInconsistencyError as e:
        logger.error(f"Inconsistent balances for trip {trip_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Trip balances are inconsistent: {e}"
        )
