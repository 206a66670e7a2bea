"""
Trip management routes.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session
from typing import List
from app.core.config import settings
from app.db.session import get_db
from app.models.trip import Trip, Currency
from app.schemas.trip import TripCreate, TripUpdate, TripResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/trips", tags=["trips"])


def get_trip_or_404(trip_id: int, db: Session) -> Trip:
    """Load a trip or answer 404."""
    trip = db.query(Trip).filter(Trip.id == trip_id).first()
    if not trip:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Trip not found"
        )
    return trip


@router.post("", response_model=TripResponse, status_code=status.HTTP_201_CREATED)
async def create_trip(
    trip_data: TripCreate,
    db: Session = Depends(get_db)
):
    """Create a new trip."""
    currency = trip_data.currency or Currency(settings.DEFAULT_CURRENCY.upper())

    new_trip = Trip(
        name=trip_data.name,
        description=trip_data.description,
        currency=currency
    )
    db.add(new_trip)
    db.commit()
    db.refresh(new_trip)

    logger.info(f"Created trip {new_trip.id} ({new_trip.name})")
    return new_trip


@router.get("", response_model=List[TripResponse])
async def list_trips(db: Session = Depends(get_db)):
    """List all trips."""
    return db.query(Trip).order_by(Trip.id).all()


@router.get("/{trip_id}", response_model=TripResponse)
async def get_trip(
    trip_id: int,
    db: Session = Depends(get_db)
):
    """Get trip details."""
    return get_trip_or_404(trip_id, db)


@router.put("/{trip_id}", response_model=TripResponse)
async def update_trip(
    trip_id: int,
    trip_data: TripUpdate,
    db: Session = Depends(get_db)
):
    """Update the provided fields of a trip."""
    trip = get_trip_or_404(trip_id, db)

    # Only fields present in the request body are changed
    for field, value in trip_data.model_dump(exclude_unset=True).items():
        if field in ("name", "currency") and value is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Trip {field} cannot be null"
            )
        setattr(trip, field, value)

    # Any accepted update counts as a modification
    trip.updated_at = func.now()
    db.commit()
    db.refresh(trip)
    return trip


@router.delete("/{trip_id}")
async def delete_trip(
    trip_id: int,
    db: Session = Depends(get_db)
):
    """Delete a trip with its participants and expenses."""
    trip = get_trip_or_404(trip_id, db)

    db.delete(trip)
    db.commit()

    logger.info(f"Deleted trip {trip_id}")
    return {"success": True}
