"""
Tests for payment state resolution and the quick paid toggle.
"""

from decimal import Decimal

import pytest

from fundraiser.models import CalendarEntry, PaymentMethod
from fundraiser.payments import format_money, quick_mark_paid, resolve_payment


def _entry(day=20, method="unpaid", amount=0):
    return CalendarEntry(year=2025, month=6, day=day, payment_method=method, payment_amount=amount)


def test_unpaid_entry():
    state = resolve_payment(_entry(day=12))
    assert state.owed == 12
    assert state.method == PaymentMethod.UNPAID
    assert state.amount == 0
    assert not state.is_paid
    assert not state.is_fully_paid
    assert state.label == "Unpaid"


def test_partial_payment_label():
    state = resolve_payment(_entry(day=20, method="zelle", amount=5))
    assert state.is_paid
    assert not state.is_fully_paid
    assert state.label == "Paid via Zelle (partial $5 of $20)"


def test_full_payment_label():
    state = resolve_payment(_entry(day=20, method="venmo", amount=Decimal("20.00")))
    assert state.is_fully_paid
    assert state.label == "Paid via Venmo (full $20)"


def test_overpayment_counts_as_full():
    state = resolve_payment(_entry(day=3, method="zelle", amount=10))
    assert state.is_fully_paid
    assert state.label == "Paid via Zelle (full $10)"


def test_fractional_amount_label():
    state = resolve_payment(_entry(day=20, method="zelle", amount=Decimal("7.5")))
    assert state.label == "Paid via Zelle (partial $7.50 of $20)"


def test_amount_without_channel_is_unpaid():
    state = resolve_payment(_entry(day=8, method="unpaid", amount=8))
    assert not state.is_paid
    assert state.label == "Unpaid"


def test_unknown_method_collapses_to_unpaid():
    state = resolve_payment(_entry(day=8, method="cash", amount=8))
    assert state.method == PaymentMethod.UNPAID
    assert not state.is_paid


@pytest.mark.parametrize("amount", [None, -5, "", "abc"])
def test_missing_or_negative_amount_is_zero(amount):
    state = resolve_payment(_entry(day=8, method="venmo", amount=amount))
    assert state.amount == 0
    assert not state.is_paid


@pytest.mark.parametrize(
    "day,method,amount",
    [(1, "zelle", 1), (15, "venmo", 3), (31, "zelle", 0), (9, "unpaid", 9), (28, "venmo", 50)],
)
def test_fully_paid_implies_paid_and_owed_is_day(day, method, amount):
    state = resolve_payment(_entry(day=day, method=method, amount=amount))
    assert state.owed == day
    if state.is_fully_paid:
        assert state.is_paid
    if state.amount == 0:
        assert not state.is_paid


def test_quick_mark_sets_full_amount():
    entry = _entry(day=14)
    patch = quick_mark_paid(entry, PaymentMethod.ZELLE)
    assert patch == {"payment_method": PaymentMethod.ZELLE, "payment_amount": Decimal(14)}


def test_quick_mark_twice_toggles_back_to_unpaid():
    entry = _entry(day=14)
    for field, value in quick_mark_paid(entry, PaymentMethod.VENMO).items():
        setattr(entry, field, value)
    assert resolve_payment(entry).is_fully_paid

    for field, value in quick_mark_paid(entry, PaymentMethod.VENMO).items():
        setattr(entry, field, value)
    state = resolve_payment(entry)
    assert state.method == PaymentMethod.UNPAID
    assert state.amount == 0


def test_quick_mark_other_channel_switches_channel():
    entry = _entry(day=14, method="zelle", amount=14)
    patch = quick_mark_paid(entry, PaymentMethod.VENMO)
    assert patch["payment_method"] == PaymentMethod.VENMO
    assert patch["payment_amount"] == 14


def test_quick_mark_partial_payment_completes_it():
    entry = _entry(day=14, method="zelle", amount=4)
    patch = quick_mark_paid(entry, PaymentMethod.ZELLE)
    assert patch["payment_amount"] == 14


def test_quick_mark_rejects_unpaid_channel():
    with pytest.raises(ValueError, match="Unknown payment channel"):
        quick_mark_paid(_entry(), PaymentMethod.UNPAID)


def test_format_money():
    assert format_money(Decimal("5.00")) == "5"
    assert format_money(Decimal("7.5")) == "7.50"
    assert format_money(0) == "0"
