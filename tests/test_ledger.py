"""Tests for ledger arithmetic."""
from decimal import Decimal
from types import SimpleNamespace

from models import PaymentDirection
from services.ledger import LedgerTotals, compute_totals, expected_profit, sum_by_direction


def txn(direction, amount):
    return SimpleNamespace(payment_direction=direction, amount=Decimal(amount))


def test_sums_each_direction_separately():
    """Received and paid totals never mix."""
    transactions = [
        txn(PaymentDirection.RECEIVED, "20000"),
        txn(PaymentDirection.PAID, "15000"),
        txn(PaymentDirection.RECEIVED, "30000"),
    ]

    assert sum_by_direction(transactions, PaymentDirection.RECEIVED) == Decimal("50000")
    assert sum_by_direction(transactions, PaymentDirection.PAID) == Decimal("15000")


def test_empty_ledger_totals():
    totals = compute_totals(Decimal("50000"), None, [])

    assert totals.total_received == 0
    assert totals.total_paid == 0
    assert totals.balance_to_receive == Decimal("50000")
    assert totals.balance_to_pay is None
    assert totals.expected_profit is None
    assert totals.current_profit == 0


def test_totals_ignore_insertion_order():
    """Recomputing from the same set in any order gives the same totals."""
    transactions = [
        txn(PaymentDirection.RECEIVED, "10000.50"),
        txn(PaymentDirection.PAID, "5000.25"),
        txn(PaymentDirection.RECEIVED, "4999.50"),
        txn(PaymentDirection.PAID, "2000"),
    ]

    forward = compute_totals(Decimal("50000"), Decimal("40000"), transactions)
    backward = compute_totals(Decimal("50000"), Decimal("40000"), list(reversed(transactions)))
    shuffled = compute_totals(
        Decimal("50000"), Decimal("40000"),
        [transactions[2], transactions[0], transactions[3], transactions[1]],
    )

    assert forward == backward == shuffled
    assert forward.total_received == Decimal("15000.00")
    assert forward.total_paid == Decimal("7000.25")


def test_profit_math():
    """Expected profit equals current profit once both sides settle."""
    assert expected_profit(Decimal("50000"), Decimal("35000")) == Decimal("15000")

    totals = compute_totals(
        Decimal("50000"),
        Decimal("35000"),
        [txn(PaymentDirection.RECEIVED, "50000"), txn(PaymentDirection.PAID, "35000")],
    )

    assert totals.current_profit == Decimal("15000")
    assert totals.current_profit == totals.expected_profit
    assert totals.balance_to_receive == 0
    assert totals.balance_to_pay == 0
    assert totals.is_settled


def test_current_profit_can_be_negative_mid_load():
    totals = compute_totals(Decimal("50000"), Decimal("40000"), [txn(PaymentDirection.PAID, "20000")])

    assert totals.current_profit == Decimal("-20000")
    assert not totals.is_settled


def test_never_settled_without_truck_freight():
    totals = compute_totals(Decimal("50000"), None, [txn(PaymentDirection.RECEIVED, "50000")])

    assert totals.balance_to_receive == 0
    assert not totals.is_settled


def test_remaining_for_direction():
    totals = LedgerTotals(
        freight_amount=Decimal("10000"),
        truck_freight_amount=Decimal("8000"),
        total_received=Decimal("9000"),
        total_paid=Decimal("500"),
    )

    assert totals.remaining_for(PaymentDirection.RECEIVED) == Decimal("1000")
    assert totals.remaining_for(PaymentDirection.PAID) == Decimal("7500")


def test_for_load_reads_load_amounts():
    load = SimpleNamespace(freight_amount=Decimal("100"), truck_freight_amount=None)

    totals = LedgerTotals.for_load(load, [txn("received", "40")])

    assert totals.total_received == Decimal("40")
    assert totals.to_dict()["balance_to_receive"] == Decimal("60")
    assert totals.to_dict()["balance_to_pay"] is None
