"""
Participant management routes.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from app.db.session import get_db
from app.models.participant import Participant
from app.schemas.participant import ParticipantCreate, ParticipantResponse
from app.services.participant_service import delete_participant as remove_participant, ParticipantInUseError
from app.api.routes.trips import get_trip_or_404

logger = logging.getLogger(__name__)

router = APIRouter(tags=["participants"])


@router.post(
    "/trips/{trip_id}/participants",
    response_model=ParticipantResponse,
    status_code=status.HTTP_201_CREATED
)
async def create_participant(
    trip_id: int,
    participant_data: ParticipantCreate,
    db: Session = Depends(get_db)
):
    """Add a participant to a trip."""
    get_trip_or_404(trip_id, db)

    participant = Participant(
        trip_id=trip_id,
        name=participant_data.name,
        email=participant_data.email
    )
    db.add(participant)
    db.commit()
    db.refresh(participant)

    logger.info(f"Added participant {participant.id} to trip {trip_id}")
    return participant


@router.get("/trips/{trip_id}/participants", response_model=List[ParticipantResponse])
async def get_participants(
    trip_id: int,
    db: Session = Depends(get_db)
):
    """Get participant list of a trip."""
    return db.query(Participant).filter(
        Participant.trip_id == trip_id
    ).order_by(Participant.id).all()


@router.delete("/participants/{participant_id}")
async def delete_participant(
    participant_id: int,
    db: Session = Depends(get_db)
):
    """Remove a participant and the expenses they paid."""
    participant = db.query(Participant).filter(Participant.id == participant_id).first()
    if not participant:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Participant not found"
        )

    try:
        remove_participant(participant, db)
    except ParticipantInUseError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e)
        )

    return {"success": True}
