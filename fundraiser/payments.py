"""
Payment state for a single calendar entry.

Each entry owes its day number in dollars. A payment is recorded as a
channel (Zelle or Venmo) plus the amount received for that entry alone.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from .models import PaymentMethod

CHANNELS = (PaymentMethod.ZELLE, PaymentMethod.VENMO)


@dataclass(frozen=True)
class PaymentState:
    owed: int
    amount: Decimal
    method: PaymentMethod
    is_paid: bool
    is_fully_paid: bool
    label: str


def _as_method(raw) -> PaymentMethod:
    if raw in CHANNELS:
        return PaymentMethod(raw)
    return PaymentMethod.UNPAID


def _as_amount(raw) -> Decimal:
    if raw is None or raw == "":
        return Decimal(0)
    try:
        amount = Decimal(str(raw))
    except InvalidOperation:
        return Decimal(0)
    if not amount.is_finite():
        return Decimal(0)
    return max(amount, Decimal(0))


def format_money(value) -> str:
    """$-less money text: '20' for whole dollars, '7.50' otherwise."""
    value = Decimal(value)
    if value == value.to_integral_value():
        return str(int(value))
    return f"{value:.2f}"


def resolve_payment(entry) -> PaymentState:
    owed = entry.day
    method = _as_method(entry.payment_method)
    amount = _as_amount(entry.payment_amount)

    is_paid = method != PaymentMethod.UNPAID and amount > 0
    is_fully_paid = is_paid and amount >= owed

    if not is_paid:
        label = "Unpaid"
    elif is_fully_paid:
        label = f"Paid via {method.label} (full ${format_money(amount)})"
    else:
        label = f"Paid via {method.label} (partial ${format_money(amount)} of ${owed})"

    return PaymentState(
        owed=owed,
        amount=amount,
        method=method,
        is_paid=is_paid,
        is_fully_paid=is_fully_paid,
        label=label,
    )


def quick_mark_paid(entry, channel) -> dict:
    """
    Patch for the admin's one-click paid checkbox on `channel`:
    - already fully paid through that channel -> back to unpaid, amount 0
    - anything else -> paid in full through that channel
    """
    if channel not in CHANNELS:
        raise ValueError(f"Unknown payment channel: {channel!r}")

    state = resolve_payment(entry)
    if state.is_fully_paid and state.method == channel:
        return {"payment_method": PaymentMethod.UNPAID, "payment_amount": Decimal(0)}
    return {"payment_method": PaymentMethod(channel), "payment_amount": Decimal(state.owed)}
