"""Sequence numbers and advance/balance labels for katha transactions."""
from typing import Iterable, Optional, Tuple

from models import PaymentDirection, TransactionType


def next_sequence(existing_for_direction: Iterable) -> Tuple[int, TransactionType]:
    """
    Next ordinal and label for a payment on one (load, direction) ledger.

    "balance" labels every payment after the first, not only a final
    settling one.

    Args:
        existing_for_direction: Transactions already recorded for the same
            load and direction

    Returns:
        (sequence, transaction type)
    """
    sequence = sum(1 for _ in existing_for_direction) + 1
    if sequence == 1:
        return sequence, TransactionType.ADVANCE
    return sequence, TransactionType.BALANCE


def resolve_party_name(
    direction: PaymentDirection,
    provider=None,
    truck=None,
    placeholder: str = "Driver"
) -> Optional[str]:
    """
    Counterparty name recorded on the transaction.

    Args:
        direction: Ledger side
        provider: The load's provider (for received payments)
        truck: The load's assigned truck (for paid payments)
        placeholder: Name used when no driver can be resolved

    Returns:
        Provider company name, driver name or the placeholder
    """
    if PaymentDirection(direction) == PaymentDirection.RECEIVED:
        return provider.company_name if provider is not None else None

    if truck is not None and truck.driver_name:
        return truck.driver_name
    return placeholder
