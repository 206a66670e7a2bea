"""
Participant service for removing participants without unbalancing a trip.
"""
import logging
from sqlalchemy.orm import Session
from app.models.expense import Expense, ExpenseSplit
from app.models.participant import Participant

logger = logging.getLogger(__name__)


class ParticipantInUseError(ValueError):
    """Raised when a participant still shares expenses paid by someone else."""


def delete_participant(participant: Participant, db: Session) -> None:
    """
    Delete a participant together with the expenses they paid.

    Shares in expenses paid by others cannot simply be dropped, since the
    payer would then be credited for money nobody owes. Those expenses must
    be deleted first.
    """
    shared_expense_ids = [
        expense_id for (expense_id,) in db.query(ExpenseSplit.expense_id).join(
            Expense, ExpenseSplit.expense_id == Expense.id
        ).filter(
            ExpenseSplit.participant_id == participant.id,
            Expense.paid_by_participant_id != participant.id
        ).all()
    ]
    if shared_expense_ids:
        raise ParticipantInUseError(
            f"Participant {participant.id} shares expenses paid by others "
            f"({', '.join(str(eid) for eid in sorted(shared_expense_ids))}); delete those first"
        )

    paid_expenses = db.query(Expense).filter(
        Expense.paid_by_participant_id == participant.id
    ).all()
    for expense in paid_expenses:
        db.delete(expense)

    participant_id = participant.id
    db.delete(participant)
    db.commit()

    logger.info(
        f"Deleted participant {participant_id} and {len(paid_expenses)} expenses they paid"
    )
