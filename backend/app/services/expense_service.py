"""
Expense service for expense-related business logic.
"""
import logging
from sqlalchemy.orm import Session
from decimal import Decimal, ROUND_FLOOR
from typing import List, Optional, Sequence, Tuple
from app.models.expense import Expense, ExpenseSplit, SplitType
from app.models.participant import Participant
from app.schemas.expense import ExpenseCreate, SplitInput
from app.services.balance_service import CENT, to_money

logger = logging.getLogger(__name__)

PERCENT_TOLERANCE = Decimal("0.01")


class ExpenseValidationError(ValueError):
    """Raised when an expense or its splits cannot be recorded."""


def distribute_cents(amount: Decimal, weights: Sequence[Decimal]) -> List[Decimal]:
    """
    Divide ``amount`` proportionally to ``weights`` in whole cents.

    Every share is first rounded down to the cent; the cents left over go one
    at a time to the shares with the largest dropped fraction, earlier shares
    first on ties. The result always sums to ``amount`` exactly.
    """
    total_weight = sum(weights, Decimal(0))
    if total_weight <= 0:
        raise ExpenseValidationError("Split weights must be positive")

    raw_shares = [amount * weight / total_weight for weight in weights]
    shares = [share.quantize(CENT, rounding=ROUND_FLOOR) for share in raw_shares]

    leftover_cents = int((amount - sum(shares, Decimal(0))) / CENT)
    by_remainder = sorted(
        range(len(shares)),
        key=lambda idx: raw_shares[idx] - shares[idx],
        reverse=True
    )
    for idx in by_remainder[:leftover_cents]:
        shares[idx] += CENT

    return shares


def allocate_split_amounts(
    amount: Decimal,
    split_type: SplitType,
    splits: Sequence[SplitInput]
) -> List[Tuple[int, Decimal, Optional[Decimal]]]:
    """
    Work out each participant's share of an expense.
    Returns (participant_id, amount, percentage) tuples in input order.
    """
    if not splits:
        raise ExpenseValidationError("An expense needs at least one split")

    participant_ids = [split.participant_id for split in splits]
    if len(set(participant_ids)) != len(participant_ids):
        raise ExpenseValidationError("A participant can only appear once in an expense's splits")

    amount = to_money(amount)

    if split_type == SplitType.EQUAL:
        shares = distribute_cents(amount, [Decimal(1)] * len(splits))
        return [(pid, share, None) for pid, share in zip(participant_ids, shares)]

    if split_type == SplitType.PERCENTAGE:
        if any(split.percentage is None for split in splits):
            raise ExpenseValidationError("Every percentage split needs a percentage")
        percentages = [Decimal(split.percentage) for split in splits]
        total_percentage = sum(percentages, Decimal(0))
        if abs(total_percentage - 100) > PERCENT_TOLERANCE:
            raise ExpenseValidationError("Percentage splits must total 100%")
        shares = distribute_cents(amount, percentages)
        return [
            (pid, share, pct)
            for pid, share, pct in zip(participant_ids, shares, percentages)
        ]

    if split_type == SplitType.CUSTOM:
        if any(split.amount is None for split in splits):
            raise ExpenseValidationError("Every custom split needs an amount")
        shares = [to_money(split.amount) for split in splits]
        if sum(shares, Decimal(0)) != amount:
            raise ExpenseValidationError("Custom split amounts must total the expense amount")
        return [(pid, share, None) for pid, share in zip(participant_ids, shares)]

    raise ExpenseValidationError(f"Unsupported split type: {split_type}")


def create_expense_with_splits(trip_id: int, expense_data: ExpenseCreate, db: Session) -> Expense:
    """Create an expense with its splits after checking everyone belongs to the trip."""
    involved_ids = {expense_data.paid_by_participant_id}
    involved_ids.update(split.participant_id for split in expense_data.splits)

    participants = db.query(Participant).filter(Participant.id.in_(involved_ids)).all()
    found = {p.id: p for p in participants}

    payer = found.get(expense_data.paid_by_participant_id)
    if payer is None:
        raise ExpenseValidationError(f"Participant {expense_data.paid_by_participant_id} not found")
    if payer.trip_id != trip_id:
        raise ExpenseValidationError(
            f"Participant {payer.id} does not belong to trip {trip_id}"
        )

    missing = involved_ids - set(found)
    if missing:
        raise ExpenseValidationError("One or more split participants not found")
    if any(p.trip_id != trip_id for p in participants):
        raise ExpenseValidationError("One or more split participants do not belong to this trip")

    allocations = allocate_split_amounts(
        expense_data.amount, expense_data.split_type, expense_data.splits
    )

    expense = Expense(
        trip_id=trip_id,
        paid_by_participant_id=payer.id,
        description=expense_data.description,
        amount=to_money(expense_data.amount),
        split_type=expense_data.split_type
    )
    db.add(expense)
    db.flush()

    for participant_id, share, percentage in allocations:
        db.add(ExpenseSplit(
            expense_id=expense.id,
            participant_id=participant_id,
            amount=share,
            percentage=percentage
        ))

    db.commit()
    db.refresh(expense)

    logger.info(
        f"Created expense {expense.id} on trip {trip_id}: {expense.amount} "
        f"split {expense.split_type.value} between {len(allocations)} participants"
    )
    return expense
