"""Tests for transaction sequencing and party names."""
from types import SimpleNamespace

from models import PaymentDirection, TransactionType
from services.transaction_sequencer import next_sequence, resolve_party_name


def test_first_payment_is_advance():
    assert next_sequence([]) == (1, TransactionType.ADVANCE)


def test_every_later_payment_is_balance():
    """Sequences are contiguous from 1 and only the first is an advance."""
    existing = []
    labels = []
    for expected in range(1, 5):
        sequence, transaction_type = next_sequence(existing)
        assert sequence == expected
        labels.append(transaction_type)
        existing.append(object())

    assert labels == [
        TransactionType.ADVANCE,
        TransactionType.BALANCE,
        TransactionType.BALANCE,
        TransactionType.BALANCE,
    ]


def test_accepts_generators():
    assert next_sequence(x for x in range(2)) == (3, TransactionType.BALANCE)


def test_received_party_is_provider():
    provider = SimpleNamespace(company_name="Sharma Roadlines")

    assert resolve_party_name(PaymentDirection.RECEIVED, provider=provider) == "Sharma Roadlines"


def test_paid_party_is_driver():
    truck = SimpleNamespace(driver_name="Suresh")

    assert resolve_party_name(PaymentDirection.PAID, truck=truck) == "Suresh"


def test_paid_party_falls_back_to_placeholder():
    assert resolve_party_name(PaymentDirection.PAID) == "Driver"
    assert resolve_party_name(
        "paid", truck=SimpleNamespace(driver_name=""), placeholder="Truck owner"
    ) == "Truck owner"
