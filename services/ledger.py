"""Ledger arithmetic for a load's katha.

Pure functions over a set of transactions; nothing here reads or writes the
database, so totals are safe to recompute on every read.
"""
from dataclasses import dataclass, asdict
from decimal import Decimal
from typing import Any, Dict, Iterable, Optional

from models import PaymentDirection

ZERO = Decimal("0")


def _direction(txn) -> PaymentDirection:
    return PaymentDirection(txn.payment_direction)


def sum_by_direction(transactions: Iterable, direction: PaymentDirection) -> Decimal:
    """
    Sum transaction amounts for one ledger side.

    Args:
        transactions: Objects with ``payment_direction`` and ``amount``
        direction: Side to sum

    Returns:
        Total amount (0 when there are none)
    """
    return sum(
        (Decimal(txn.amount) for txn in transactions if _direction(txn) == direction),
        ZERO,
    )


@dataclass(frozen=True)
class LedgerTotals:
    """Totals derived from a load's freight and its transactions."""

    freight_amount: Decimal
    truck_freight_amount: Optional[Decimal]
    total_received: Decimal
    total_paid: Decimal

    @property
    def balance_to_receive(self) -> Decimal:
        return self.freight_amount - self.total_received

    @property
    def balance_to_pay(self) -> Optional[Decimal]:
        """Unpaid truck freight; None when truck freight is not set."""
        if self.truck_freight_amount is None:
            return None
        return self.truck_freight_amount - self.total_paid

    @property
    def current_profit(self) -> Decimal:
        return self.total_received - self.total_paid

    @property
    def expected_profit(self) -> Optional[Decimal]:
        return expected_profit(self.freight_amount, self.truck_freight_amount)

    @property
    def is_settled(self) -> bool:
        """Both ledgers have reached their caps."""
        if self.truck_freight_amount is None:
            return False
        return (
            self.total_received >= self.freight_amount
            and self.total_paid >= self.truck_freight_amount
        )

    def remaining_for(self, direction: PaymentDirection) -> Optional[Decimal]:
        """Remaining cap on one side of the ledger."""
        if direction == PaymentDirection.RECEIVED:
            return self.balance_to_receive
        return self.balance_to_pay

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary including derived figures."""
        data = asdict(self)
        data.update(
            balance_to_receive=self.balance_to_receive,
            balance_to_pay=self.balance_to_pay,
            current_profit=self.current_profit,
            expected_profit=self.expected_profit,
            is_settled=self.is_settled,
        )
        return data

    @classmethod
    def for_load(cls, load, transactions: Iterable) -> "LedgerTotals":
        """Compute totals for a load from its transactions."""
        return compute_totals(load.freight_amount, load.truck_freight_amount, transactions)


def expected_profit(
    freight_amount: Decimal,
    truck_freight_amount: Optional[Decimal]
) -> Optional[Decimal]:
    """
    Profit the load will make once both sides settle.

    Args:
        freight_amount: Amount owed by the provider
        truck_freight_amount: Amount owed to the truck, if agreed

    Returns:
        freight_amount - truck_freight_amount, or None if truck freight unset
    """
    if truck_freight_amount is None:
        return None
    return Decimal(freight_amount) - Decimal(truck_freight_amount)


def compute_totals(
    freight_amount: Decimal,
    truck_freight_amount: Optional[Decimal],
    transactions: Iterable
) -> LedgerTotals:
    """
    Compute ledger totals; input order does not matter.

    Args:
        freight_amount: Amount owed by the provider
        truck_freight_amount: Amount owed to the truck, if agreed
        transactions: The load's transactions

    Returns:
        LedgerTotals
    """
    transactions = list(transactions)
    return LedgerTotals(
        freight_amount=Decimal(freight_amount),
        truck_freight_amount=(
            Decimal(truck_freight_amount) if truck_freight_amount is not None else None
        ),
        total_received=sum_by_direction(transactions, PaymentDirection.RECEIVED),
        total_paid=sum_by_direction(transactions, PaymentDirection.PAID),
    )
