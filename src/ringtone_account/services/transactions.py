"""Wallet ledger classification and display formatting.

Two display policies live here:

* Wallet amounts are signed by transaction *type*, not by the stored sign:
  deposits, prizes and referral rewards are credits, everything else is a
  debit.
* A transaction counts towards the loyalty points history when its
  description mentions "ringtone" or "points" (case-insensitive). There is
  no structured category for this upstream.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal
from typing import Any

from ringtone_account.api.schemas.transactions import Transaction
from ringtone_account.core.constants import (
    CREDIT_TRANSACTION_TYPES,
    CURRENCY_SYMBOL,
    POINTS_DESCRIPTION_KEYWORDS,
    POINTS_PER_POUND,
    TRANSACTION_FILTER_ALL,
    WALLET_RECENT_TRANSACTIONS,
)
from ringtone_account.services.entries import timestamp_or_epoch

_PENNY = Decimal("0.01")


def filter_by_type(
    transactions: Iterable[Transaction],
    selected: str = TRANSACTION_FILTER_ALL,
) -> list[Transaction]:
    """Transactions of the selected type, or all of them for ``"all"``."""
    if selected == TRANSACTION_FILTER_ALL:
        return list(transactions)
    return [t for t in transactions if t.type == selected]


def recent_transactions(
    transactions: list[Transaction],
    limit: int = WALLET_RECENT_TRANSACTIONS,
) -> list[Transaction]:
    return transactions[:limit]


def is_points_transaction(transaction: Transaction) -> bool:
    description = (transaction.description or "").lower()
    return any(keyword in description for keyword in POINTS_DESCRIPTION_KEYWORDS)


def points_transactions(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Loyalty points history, newest first; undated entries sort last."""
    return sorted(
        (t for t in transactions if is_points_transaction(t)),
        key=lambda t: timestamp_or_epoch(t.created_at),
        reverse=True,
    )


def is_credit(transaction_type: str) -> bool:
    return transaction_type in CREDIT_TRANSACTION_TYPES


def format_money(amount: Decimal) -> str:
    return f"{CURRENCY_SYMBOL}{amount.quantize(_PENNY):,.2f}"


def format_amount(transaction: Transaction) -> str:
    """Signed wallet amount, e.g. ``+£10.00`` or ``-£10.00``.

    The sign comes from the transaction type; the stored sign is ignored.
    """
    sign = "+" if is_credit(transaction.type) else "-"
    return f"{sign}{format_money(abs(transaction.amount))}"


def format_points_change(transaction: Transaction) -> str:
    """Points delta such as ``+1,500 pts``. Uses the stored sign."""
    change = transaction.amount
    prefix = "+" if change > 0 else ""
    if change == change.to_integral_value():
        return f"{prefix}{int(change):,} pts"
    return f"{prefix}{change.normalize():,f} pts"


def points_to_pounds(points: int) -> Decimal:
    """Cash value of a points balance at the fixed redemption rate."""
    return (Decimal(points) / POINTS_PER_POUND).quantize(_PENNY)


def type_label(transaction_type: str) -> str:
    return transaction_type[:1].upper() + transaction_type[1:]


def transaction_row(transaction: Transaction) -> dict[str, Any]:
    """Wallet list row: raw fields plus the display amount."""
    return {
        "id": transaction.id,
        "type": transaction.type,
        "type_label": type_label(transaction.type),
        "description": transaction.description,
        "created_at": transaction.created_at,
        "is_credit": is_credit(transaction.type),
        "display_amount": format_amount(transaction),
    }


def points_row(transaction: Transaction) -> dict[str, Any]:
    return {
        "id": transaction.id,
        "description": transaction.description,
        "created_at": transaction.created_at,
        "is_positive": transaction.amount > 0,
        "display_points": format_points_change(transaction),
    }
