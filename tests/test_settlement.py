"""Tests for automatic settlement."""
from decimal import Decimal
from types import SimpleNamespace

import pytest

from models import LoadStatus, PaymentDirection
from repositories import TruckRepository
from services.load_state_machine import LoadStateMachine
from services.settlement import SettlementTrigger
from services.truck_availability import TruckAvailabilityManager


def txn(direction, amount):
    return SimpleNamespace(payment_direction=direction, amount=Decimal(amount))


@pytest.fixture
def trigger(db_session):
    return SettlementTrigger(LoadStateMachine(TruckAvailabilityManager(TruckRepository(db_session))))


@pytest.fixture
def assigned_load(make_load, truck, service, account_id):
    load = make_load(freight_amount="50000", truck_freight_amount="40000")
    return service.assign_truck(account_id, load.id, truck.id)


def test_partial_payments_do_not_settle(trigger, assigned_load):
    totals = trigger.evaluate(assigned_load, [txn(PaymentDirection.RECEIVED, "50000")])

    assert not totals.is_settled
    assert assigned_load.status == LoadStatus.ASSIGNED


def test_settles_when_both_sides_full(trigger, assigned_load, truck):
    transactions = [txn(PaymentDirection.RECEIVED, "50000"), txn(PaymentDirection.PAID, "40000")]

    totals = trigger.evaluate(assigned_load, transactions)

    assert totals.is_settled
    assert assigned_load.status == LoadStatus.COMPLETED
    assert truck.is_active is True


def test_never_settles_without_truck_freight(trigger, make_load):
    load = make_load(freight_amount="50000", truck_freight_amount=None)

    trigger.evaluate(load, [txn(PaymentDirection.RECEIVED, "50000")])

    assert load.status == LoadStatus.PENDING


def test_completed_load_is_left_alone(trigger, assigned_load):
    transactions = [txn(PaymentDirection.RECEIVED, "50000"), txn(PaymentDirection.PAID, "40000")]
    trigger.evaluate(assigned_load, transactions)

    completed_at = assigned_load.completed_at
    trigger.evaluate(assigned_load, transactions)

    assert assigned_load.status == LoadStatus.COMPLETED
    assert assigned_load.completed_at == completed_at
