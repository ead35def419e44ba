"""Choosing the wire transaction type for an operation."""

from typing import Optional, Union

from ..base import BankAccount, ProfileOperation
from .codes import PROFILE_OPERATIONS, TRANSACTIONS, TransactionKind


def purchase_action(source) -> TransactionKind:
    if isinstance(source, BankAccount):
        return TransactionKind.CHECK_PURCHASE
    return TransactionKind.PURCHASE


def void_action(original_transaction_type: Optional[str]) -> TransactionKind:
    """Voiding a refund needs its own type; anything else voids a purchase."""
    if original_transaction_type == TRANSACTIONS[TransactionKind.REFUND]:
        return TransactionKind.VOID_REFUND
    return TransactionKind.VOID_PURCHASE


def refund_action(original_transaction_type: Optional[str]) -> TransactionKind:
    """Check purchases are refunded as check refunds."""
    if original_transaction_type == TRANSACTIONS[TransactionKind.CHECK_PURCHASE]:
        return TransactionKind.CHECK_REFUND
    return TransactionKind.REFUND


def secure_profile_action(operation: Optional[Union[ProfileOperation, str]]) -> str:
    """Wire letter for a profile operation, defaulting to a new profile."""
    try:
        return PROFILE_OPERATIONS[ProfileOperation(operation)]
    except ValueError:
        return PROFILE_OPERATIONS[ProfileOperation.NEW]
