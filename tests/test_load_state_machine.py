"""Tests for load status transitions."""
from datetime import datetime

import pytest

from exceptions import (
    InvalidTransitionError,
    LoadAlreadyCompletedError,
    TruckNotSelectedError,
    TruckUnavailableError,
)
from models import LoadStatus
from repositories import TruckRepository
from services.load_state_machine import LoadStateMachine, can_transition, next_manual_status
from services.truck_availability import TruckAvailabilityManager


@pytest.fixture
def state_machine(db_session):
    return LoadStateMachine(TruckAvailabilityManager(TruckRepository(db_session)))


@pytest.fixture
def load(make_load):
    return make_load()


def test_manual_successors():
    assert next_manual_status(LoadStatus.PENDING) == LoadStatus.ASSIGNED
    assert next_manual_status(LoadStatus.ASSIGNED) == LoadStatus.IN_TRANSIT
    assert next_manual_status(LoadStatus.IN_TRANSIT) == LoadStatus.DELIVERED
    assert next_manual_status(LoadStatus.DELIVERED) is None
    assert next_manual_status(LoadStatus.COMPLETED) is None


@pytest.mark.parametrize("current,target", [
    (LoadStatus.PENDING, LoadStatus.IN_TRANSIT),
    (LoadStatus.PENDING, LoadStatus.DELIVERED),
    (LoadStatus.ASSIGNED, LoadStatus.DELIVERED),
    (LoadStatus.IN_TRANSIT, LoadStatus.ASSIGNED),
    (LoadStatus.DELIVERED, LoadStatus.PENDING),
    (LoadStatus.ASSIGNED, LoadStatus.ASSIGNED),
])
def test_skips_and_regressions_are_illegal(current, target):
    assert not can_transition(current, target)


def test_completion_only_through_settlement():
    for status in (LoadStatus.PENDING, LoadStatus.ASSIGNED, LoadStatus.IN_TRANSIT, LoadStatus.DELIVERED):
        assert not can_transition(status, LoadStatus.COMPLETED)
        assert can_transition(status, LoadStatus.COMPLETED, settlement=True)


def test_completed_is_absorbing():
    for status in LoadStatus:
        assert not can_transition(LoadStatus.COMPLETED, status)
        assert not can_transition(LoadStatus.COMPLETED, status, settlement=True)


def test_assign_sets_truck_timestamp_and_availability(state_machine, load, truck):
    now = datetime(2024, 3, 1, 9, 30)

    previous = state_machine.assign(load, truck, now=now)

    assert previous == LoadStatus.PENDING
    assert load.status == LoadStatus.ASSIGNED
    assert load.truck_id == truck.id
    assert load.assigned_at == now
    assert truck.is_active is False


def test_assign_requires_truck(state_machine, load):
    with pytest.raises(TruckNotSelectedError):
        state_machine.assign(load, None)

    assert load.status == LoadStatus.PENDING


def test_assign_rejects_busy_truck(state_machine, make_load, truck):
    state_machine.assign(make_load(), truck)
    second = make_load()

    with pytest.raises(TruckUnavailableError):
        state_machine.assign(second, truck)

    assert second.status == LoadStatus.PENDING
    assert second.truck_id is None


def test_full_manual_path_sets_timestamps(state_machine, load, truck):
    state_machine.assign(load, truck)
    state_machine.advance(load, LoadStatus.IN_TRANSIT)
    state_machine.advance(load, LoadStatus.DELIVERED)

    assert load.status == LoadStatus.DELIVERED
    assert load.loading_completed_at is not None
    assert load.delivery_completed_at is not None
    assert load.completed_at is None


def test_advance_rejects_skip(state_machine, load, truck):
    state_machine.assign(load, truck)

    with pytest.raises(InvalidTransitionError):
        state_machine.advance(load, LoadStatus.DELIVERED)

    assert load.status == LoadStatus.ASSIGNED


def test_advance_cannot_complete_or_assign(state_machine, load, truck):
    with pytest.raises(InvalidTransitionError):
        state_machine.advance(load, LoadStatus.ASSIGNED)

    state_machine.assign(load, truck)
    with pytest.raises(InvalidTransitionError):
        state_machine.advance(load, LoadStatus.COMPLETED)


def test_complete_restores_truck_and_is_final(state_machine, load, truck):
    state_machine.assign(load, truck)

    state_machine.complete(load)

    assert load.status == LoadStatus.COMPLETED
    assert load.completed_at is not None
    assert truck.is_active is True

    with pytest.raises(LoadAlreadyCompletedError):
        state_machine.advance(load, LoadStatus.DELIVERED)
    with pytest.raises(LoadAlreadyCompletedError):
        state_machine.complete(load)


def test_complete_without_truck(state_machine, load):
    state_machine.complete(load)

    assert load.status == LoadStatus.COMPLETED
