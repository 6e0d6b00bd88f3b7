"""Load status transitions and their side effects."""
from datetime import datetime
from typing import Optional

from exceptions import InvalidTransitionError, LoadAlreadyCompletedError, TruckNotSelectedError
from models import Load, LoadStatus, Truck
from services.truck_availability import TruckAvailabilityManager
from utils.date_helpers import utc_timestamp
from logging_config import get_logger

logger = get_logger(__name__)

# Operator-driven steps; each status has exactly one manual successor.
MANUAL_TRANSITIONS = {
    LoadStatus.PENDING: LoadStatus.ASSIGNED,
    LoadStatus.ASSIGNED: LoadStatus.IN_TRANSIT,
    LoadStatus.IN_TRANSIT: LoadStatus.DELIVERED,
}

STATUS_TIMESTAMPS = {
    LoadStatus.ASSIGNED: "assigned_at",
    LoadStatus.IN_TRANSIT: "loading_completed_at",
    LoadStatus.DELIVERED: "delivery_completed_at",
    LoadStatus.COMPLETED: "completed_at",
}


def next_manual_status(status: LoadStatus) -> Optional[LoadStatus]:
    """The only status an operator may move a load to next, if any."""
    return MANUAL_TRANSITIONS.get(LoadStatus(status))


def can_transition(current: LoadStatus, target: LoadStatus, settlement: bool = False) -> bool:
    """
    Check a transition without applying it.

    Args:
        current: Current status
        target: Requested status
        settlement: Completion requested by settlement or manual override

    Returns:
        True if allowed
    """
    current = LoadStatus(current)
    target = LoadStatus(target)

    if current == LoadStatus.COMPLETED:
        return False
    if target == LoadStatus.COMPLETED:
        return settlement
    return MANUAL_TRANSITIONS.get(current) == target


class LoadStateMachine:
    """
    Enforce pending -> assigned -> in_transit -> delivered, with completed
    terminal and reachable from any open status only through settlement
    (or the explicit manual override, which goes through the same path).
    """

    def __init__(self, trucks: TruckAvailabilityManager):
        self.trucks = trucks

    def assign(self, load: Load, truck: Optional[Truck], now: Optional[datetime] = None) -> LoadStatus:
        """
        pending -> assigned: attach the truck and mark it busy.

        Returns:
            Previous status
        """
        if truck is None:
            raise TruckNotSelectedError("Select a truck before assigning the load")

        self._check(load, LoadStatus.ASSIGNED)
        self.trucks.on_assigned(truck)
        previous = self._apply(load, LoadStatus.ASSIGNED, now=now)
        load.truck_id = truck.id
        load.truck = truck
        return previous

    def advance(self, load: Load, target: LoadStatus, now: Optional[datetime] = None) -> LoadStatus:
        """
        Manual non-assignment step (assigned -> in_transit, in_transit -> delivered).

        Returns:
            Previous status
        """
        target = LoadStatus(target)
        if target == LoadStatus.ASSIGNED:
            raise InvalidTransitionError("Use truck assignment to move a load to assigned")
        if target == LoadStatus.COMPLETED:
            raise InvalidTransitionError(
                "Loads are completed by settlement or manual override, not by a status update"
            )
        return self._apply(load, target, now=now)

    def complete(self, load: Load, now: Optional[datetime] = None) -> LoadStatus:
        """
        Any open status -> completed; restores the assigned truck.

        Returns:
            Previous status
        """
        previous = self._apply(load, LoadStatus.COMPLETED, settlement=True, now=now)
        self.trucks.on_completed(load.truck)
        return previous

    def _check(self, load: Load, target: LoadStatus, settlement: bool = False) -> LoadStatus:
        current = LoadStatus(load.status)

        if current == LoadStatus.COMPLETED:
            raise LoadAlreadyCompletedError(f"Load {load.id} is already completed")

        if not can_transition(current, target, settlement=settlement):
            raise InvalidTransitionError(
                f"Cannot move load {load.id} from {current.value} to {target.value}"
            )
        return current

    def _apply(
        self,
        load: Load,
        target: LoadStatus,
        settlement: bool = False,
        now: Optional[datetime] = None
    ) -> LoadStatus:
        current = self._check(load, target, settlement=settlement)

        load.status = target
        setattr(load, STATUS_TIMESTAMPS[target], now or utc_timestamp())

        logger.info(
            "load_status_changed",
            load_id=load.id,
            from_status=current.value,
            to_status=target.value,
        )
        return current
