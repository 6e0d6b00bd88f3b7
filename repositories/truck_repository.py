"""Repository for truck operations."""
from typing import List, Optional

from sqlalchemy.orm import Session

from models import Truck
from repositories.base import BaseRepository
from logging_config import get_logger

logger = get_logger(__name__)


class TruckRepository(BaseRepository[Truck]):
    """Repository for truck-specific database operations."""

    def __init__(self, db: Session):
        """
        Initialize truck repository.

        Args:
            db: Database session
        """
        super().__init__(Truck, db)

    def get_available(self, account_id: str) -> List[Truck]:
        """
        Get trucks that can take a new assignment.

        Args:
            account_id: Owning account

        Returns:
            List of available trucks ordered by truck number
        """
        return self.db.query(Truck).filter(
            Truck.account_id == account_id,
            Truck.is_active.is_(True),
        ).order_by(Truck.truck_number.asc()).all()

    def get_by_truck_number(self, account_id: str, truck_number: str) -> Optional[Truck]:
        """
        Get truck by registration number.

        Args:
            account_id: Owning account
            truck_number: Truck number

        Returns:
            Truck or None
        """
        return self.db.query(Truck).filter(
            Truck.account_id == account_id,
            Truck.truck_number == truck_number,
        ).first()
