"""
Tests for splitting an expense amount between participants.
"""
from decimal import Decimal

import pytest

from app.models.expense import SplitType
from app.schemas.expense import SplitInput
from app.services.expense_service import (
    ExpenseValidationError,
    allocate_split_amounts,
    distribute_cents,
)

D = Decimal


def test_distribute_cents_even():
    assert distribute_cents(D("100.00"), [D(1), D(1)]) == [D("50.00"), D("50.00")]


def test_distribute_cents_gives_leftover_to_earliest():
    shares = distribute_cents(D("100.00"), [D(1), D(1), D(1)])

    assert shares == [D("33.34"), D("33.33"), D("33.33")]
    assert sum(shares) == D("100.00")


def test_distribute_cents_largest_remainder_first():
    # 10.00 at 1/6, 2/6, 3/6 -> 1.666, 3.333, 5.000
    shares = distribute_cents(D("10.00"), [D(1), D(2), D(3)])

    assert shares == [D("1.67"), D("3.33"), D("5.00")]


def test_equal_split():
    splits = [SplitInput(participant_id=pid) for pid in (4, 5, 6)]

    allocations = allocate_split_amounts(D("10"), SplitType.EQUAL, splits)

    assert allocations == [(4, D("3.34"), None), (5, D("3.33"), None), (6, D("3.33"), None)]


def test_percentage_split():
    splits = [
        SplitInput(participant_id=1, percentage=D("70")),
        SplitInput(participant_id=2, percentage=D("30")),
    ]

    allocations = allocate_split_amounts(D("100"), SplitType.PERCENTAGE, splits)

    assert allocations == [(1, D("70.00"), D("70")), (2, D("30.00"), D("30"))]


def test_percentage_split_sums_exactly():
    splits = [
        SplitInput(participant_id=1, percentage=D("33.33")),
        SplitInput(participant_id=2, percentage=D("33.33")),
        SplitInput(participant_id=3, percentage=D("33.34")),
    ]

    allocations = allocate_split_amounts(D("99.99"), SplitType.PERCENTAGE, splits)

    assert sum(amount for _, amount, _ in allocations) == D("99.99")


def test_percentage_split_must_total_100():
    splits = [
        SplitInput(participant_id=1, percentage=D("50")),
        SplitInput(participant_id=2, percentage=D("40")),
    ]

    with pytest.raises(ExpenseValidationError, match="100%"):
        allocate_split_amounts(D("100"), SplitType.PERCENTAGE, splits)


def test_percentage_split_requires_percentages():
    splits = [SplitInput(participant_id=1, percentage=D("100")), SplitInput(participant_id=2)]

    with pytest.raises(ExpenseValidationError):
        allocate_split_amounts(D("100"), SplitType.PERCENTAGE, splits)


def test_custom_split():
    splits = [
        SplitInput(participant_id=1, amount=D("70")),
        SplitInput(participant_id=2, amount=D("30")),
    ]

    allocations = allocate_split_amounts(D("100"), SplitType.CUSTOM, splits)

    assert allocations == [(1, D("70.00"), None), (2, D("30.00"), None)]


def test_custom_split_must_total_amount():
    splits = [
        SplitInput(participant_id=1, amount=D("70")),
        SplitInput(participant_id=2, amount=D("29.99")),
    ]

    with pytest.raises(ExpenseValidationError, match="total the expense amount"):
        allocate_split_amounts(D("100"), SplitType.CUSTOM, splits)


def test_duplicate_participants_rejected():
    splits = [SplitInput(participant_id=1), SplitInput(participant_id=1)]

    with pytest.raises(ExpenseValidationError, match="only appear once"):
        allocate_split_amounts(D("100"), SplitType.EQUAL, splits)


def test_empty_splits_rejected():
    with pytest.raises(ExpenseValidationError):
        allocate_split_amounts(D("100"), SplitType.EQUAL, [])
