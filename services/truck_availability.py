"""Truck availability tracking across assignment and completion."""
from typing import List, Optional

from exceptions import TruckUnavailableError
from models import Truck
from repositories.truck_repository import TruckRepository
from logging_config import get_logger

logger = get_logger(__name__)


class TruckAvailabilityManager:
    """
    Flip a truck's ``is_active`` flag as loads are assigned and completed.

    Updates are flushed, not committed, so they land in the same commit as
    the assignment or the settling transaction.
    """

    def __init__(self, trucks: TruckRepository):
        self.trucks = trucks

    def available_trucks(self, account_id: str) -> List[Truck]:
        """Trucks that may be offered for a new assignment."""
        return self.trucks.get_available(account_id)

    def on_assigned(self, truck: Truck) -> Truck:
        """
        Mark a truck busy.

        Raises:
            TruckUnavailableError: If the truck is already on another load
        """
        if not truck.is_active:
            raise TruckUnavailableError(f"Truck {truck.truck_number} is not available")

        self.trucks.update(truck, commit=False, is_active=False)
        logger.info("truck_marked_busy", truck_id=truck.id, truck_number=truck.truck_number)
        return truck

    def on_completed(self, truck: Optional[Truck]) -> bool:
        """
        Make a truck available again after its load completes.

        Returns:
            True if availability changed
        """
        if truck is None:
            return False

        if truck.is_active:
            logger.warning("truck_already_available", truck_id=truck.id)
            return False

        self.trucks.update(truck, commit=False, is_active=True)
        logger.info("truck_marked_available", truck_id=truck.id, truck_number=truck.truck_number)
        return True
