"""
Expense management routes.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session, selectinload
from typing import List
from app.db.session import get_db
from app.models.expense import Expense
from app.schemas.expense import ExpenseCreate, ExpenseResponse
from app.services.expense_service import create_expense_with_splits, ExpenseValidationError
from app.api.routes.trips import get_trip_or_404

logger = logging.getLogger(__name__)

router = APIRouter(tags=["expenses"])


@router.post(
    "/trips/{trip_id}/expenses",
    response_model=ExpenseResponse,
    status_code=status.HTTP_201_CREATED
)
async def create_expense(
    trip_id: int,
    expense_data: ExpenseCreate,
    db: Session = Depends(get_db)
):
    """Record an expense and split it between participants."""
    get_trip_or_404(trip_id, db)

    try:
        expense = create_expense_with_splits(trip_id, expense_data, db)
    except ExpenseValidationError as e:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    return expense


@router.get("/trips/{trip_id}/expenses", response_model=List[ExpenseResponse])
async def get_trip_expenses(
    trip_id: int,
    db: Session = Depends(get_db)
):
    """Get all expenses of a trip with their splits."""
    return db.query(Expense).options(
        selectinload(Expense.splits)
    ).filter(
        Expense.trip_id == trip_id
    ).order_by(Expense.id).all()


@router.delete("/expenses/{expense_id}")
async def delete_expense(
    expense_id: int,
    db: Session = Depends(get_db)
):
    """Delete an expense and its splits."""
    expense = db.query(Expense).filter(Expense.id == expense_id).first()
    if not expense:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Expense not found"
        )

    db.delete(expense)
    db.commit()

    logger.info(f"Deleted expense {expense_id}")
    return {"success": True}
