"""
Balance service: net balances and settlement planning for a trip.

The computation is split in two pure steps that run back to back:

* ``aggregate_balances`` turns per-participant paid/owed totals into signed
  net balances (positive = is owed money, negative = owes money).
* ``plan_settlements`` greedily matches the largest creditor with the largest
  debtor until every balance is zero, yielding at most ``n - 1`` payments.

``get_trip_balances`` is the only function touching the database; it reads
the two aggregate sums for a trip and hands them to ``compute_trip_balances``.
"""
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.expense import Expense, ExpenseSplit
from app.models.participant import Participant
from app.schemas.balance import ParticipantBalance, Settlement, TripBalances

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
TOLERANCE = Decimal("0.01")


class BalanceInconsistencyError(Exception):
    """Raised when paid and owed totals of a trip do not net to zero."""

    def __init__(self, message: str, trip_id: Optional[int] = None, imbalance: Decimal = Decimal(0)):
        super().__init__(message)
        self.trip_id = trip_id
        self.imbalance = imbalance


def to_money(value: Any) -> Decimal:
    """Convert a numeric value to a Decimal rounded to cents.

    Floats go through their string form so 0.1 stays 0.1 instead of its
    binary expansion. ``None`` counts as zero.
    """
    if value is None:
        return Decimal("0.00")
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def _participant_fields(participant: Any) -> Tuple[int, str]:
    """Read (id, name) from an ORM row, a mapping or a 2-tuple."""
    if isinstance(participant, Mapping):
        return participant["id"], participant["name"]
    if isinstance(participant, tuple):
        return participant[0], participant[1]
    return participant.id, participant.name


def aggregate_balances(
    participants: Iterable[Any],
    paid_totals: Mapping[int, Any],
    owed_totals: Mapping[int, Any],
) -> List[ParticipantBalance]:
    """
    Compute one net balance per participant, in the order supplied.

    Participants absent from either mapping count as having paid or owed
    nothing; they are still listed with a zero balance.
    """
    balances = []
    for participant in participants:
        participant_id, name = _participant_fields(participant)
        paid = to_money(paid_totals.get(participant_id))
        owed = to_money(owed_totals.get(participant_id))
        balances.append(ParticipantBalance(
            participant_id=participant_id,
            participant_name=name,
            balance=paid - owed
        ))
    return balances


def plan_settlements(
    balances: Iterable[ParticipantBalance],
    tolerance: Decimal = TOLERANCE,
) -> List[Settlement]:
    """
    Suggest payments that bring every balance back to zero.

    Creditors and debtors are each sorted by amount, largest first. Python's
    sort is stable, so equal amounts keep the order the balances came in.
    Amounts are rounded to cents only when a settlement is emitted.

    Raises BalanceInconsistencyError when one side runs out while the other
    still holds more than ``tolerance`` and the balances do not net to zero.
    """
    tolerance = Decimal(tolerance)
    balances = list(balances)

    # [name, remaining amount] pairs, debtors stored as positive magnitudes
    creditors = [[b.participant_name, b.balance] for b in balances if b.balance > tolerance]
    debtors = [[b.participant_name, -b.balance] for b in balances if b.balance < -tolerance]
    # Balances within tolerance take no part in matching
    negligible = sum((b.balance for b in balances if abs(b.balance) <= tolerance), Decimal(0))

    creditors.sort(key=lambda x: x[1], reverse=True)
    debtors.sort(key=lambda x: x[1], reverse=True)

    settlements = []
    cred_idx = 0
    debt_idx = 0

    while cred_idx < len(creditors) and debt_idx < len(debtors):
        creditor = creditors[cred_idx]
        debtor = debtors[debt_idx]

        settle_amount = min(creditor[1], debtor[1])
        if settle_amount > tolerance:
            settlements.append(Settlement(
                from_participant=debtor[0],
                to_participant=creditor[0],
                amount=settle_amount.quantize(CENT, rounding=ROUND_HALF_UP)
            ))

        creditor[1] -= settle_amount
        debtor[1] -= settle_amount

        if creditor[1] < tolerance:
            cred_idx += 1
        if debtor[1] < tolerance:
            debt_idx += 1

    # Remaining creditor minus debtor amounts plus the negligible balances
    # equals the sum of all balances, which must be zero within tolerance.
    residual = sum((c[1] for c in creditors[cred_idx:]), Decimal(0)) \
        - sum((d[1] for d in debtors[debt_idx:]), Decimal(0)) + negligible
    leftover = [entry for entry in creditors[cred_idx:] + debtors[debt_idx:] if entry[1] > tolerance]
    if leftover and abs(residual) > tolerance:
        raise BalanceInconsistencyError(
            f"Unsettled balance of {residual} left after planning "
            f"({', '.join(name for name, _ in leftover)})",
            imbalance=residual
        )

    return settlements


def compute_trip_balances(
    trip_id: int,
    participants: Iterable[Any],
    paid_totals: Mapping[int, Any],
    owed_totals: Mapping[int, Any],
    tolerance: Decimal = TOLERANCE,
) -> TripBalances:
    """
    Compute balances and settlements for a trip from its paid/owed totals.

    Participants may be ORM rows, ``{"id", "name"}`` mappings or
    ``(id, name)`` tuples. A trip without participants yields empty lists.
    """
    balances = aggregate_balances(participants, paid_totals, owed_totals)

    imbalance = sum((b.balance for b in balances), Decimal("0.00"))
    if abs(imbalance) > Decimal(tolerance):
        logger.error(f"Trip {trip_id} balances do not net to zero (off by {imbalance})")
        raise BalanceInconsistencyError(
            f"Balances of trip {trip_id} do not net to zero (off by {imbalance})",
            trip_id=trip_id,
            imbalance=imbalance
        )

    try:
        settlements = plan_settlements(balances, tolerance)
    except BalanceInconsistencyError as e:
        e.trip_id = trip_id
        logger.error(f"Trip {trip_id} settlement planning left a residual: {e}")
        raise

    logger.debug(f"Trip {trip_id}: {len(balances)} balances, {len(settlements)} settlements")
    return TripBalances(trip_id=trip_id, balances=balances, settlements=settlements)


def get_paid_totals(trip_id: int, db: Session) -> Dict[int, Decimal]:
    """Sum of expense amounts per payer for a trip."""
    rows = db.query(
        Expense.paid_by_participant_id,
        func.sum(Expense.amount)
    ).filter(
        Expense.trip_id == trip_id
    ).group_by(Expense.paid_by_participant_id).all()
    return {participant_id: total for participant_id, total in rows}


def get_owed_totals(trip_id: int, db: Session) -> Dict[int, Decimal]:
    """Sum of split amounts per participant across a trip's expenses."""
    rows = db.query(
        ExpenseSplit.participant_id,
        func.sum(ExpenseSplit.amount)
    ).join(
        Expense, ExpenseSplit.expense_id == Expense.id
    ).filter(
        Expense.trip_id == trip_id
    ).group_by(ExpenseSplit.participant_id).all()
    return {participant_id: total for participant_id, total in rows}


def get_trip_balances(trip_id: int, db: Session, tolerance: Decimal = TOLERANCE) -> TripBalances:
    """
    Load a trip's participants and aggregates, then compute its balances.
    An unknown trip id behaves like a trip without participants.
    """
    participants = db.query(Participant).filter(
        Participant.trip_id == trip_id
    ).order_by(Participant.id).all()

    paid_totals = get_paid_totals(trip_id, db)
    owed_totals = get_owed_totals(trip_id, db)

    return compute_trip_balances(trip_id, participants, paid_totals, owed_totals, tolerance)
