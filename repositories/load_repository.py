"""Repository for load operations."""
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from exceptions import DatabaseError
from models import Load, LoadStatus, PaymentDirection
from repositories.base import BaseRepository
from utils.validation import to_paise
from logging_config import get_logger

logger = get_logger(__name__)


class LoadRepository(BaseRepository[Load]):
    """Repository for load-specific database operations."""

    def __init__(self, db: Session):
        """
        Initialize load repository.

        Args:
            db: Database session
        """
        super().__init__(Load, db)

    def get_for_update(self, account_id: str, load_id: int) -> Optional[Load]:
        """
        Get a load and lock its row for the rest of the transaction.

        Dialects without row locks (SQLite) ignore FOR UPDATE; there the
        conditional updates in ``reserve_payment`` still hold the caps.

        Args:
            account_id: Owning account
            load_id: Load ID

        Returns:
            Load or None
        """
        try:
            return self.db.query(Load).filter(
                Load.id == load_id,
                Load.account_id == account_id,
            ).with_for_update().first()
        except SQLAlchemyError as e:
            logger.error(f"Error locking load {load_id}: {e}")
            raise DatabaseError("Failed to get Load") from e

    def get_by_status(
        self,
        account_id: str,
        status: LoadStatus,
        skip: int = 0,
        limit: int = 100
    ) -> List[Load]:
        """
        Get loads of an account by status.

        Args:
            account_id: Owning account
            status: Load status
            skip: Pagination offset
            limit: Page size

        Returns:
            List of loads
        """
        return self.db.query(Load).filter(
            Load.account_id == account_id,
            Load.status == status,
        ).order_by(Load.created_at.desc()).offset(skip).limit(limit).all()

    def get_by_provider(
        self,
        account_id: str,
        load_provider_id: int,
        skip: int = 0,
        limit: int = 100
    ) -> List[Load]:
        """
        Get loads for a load provider.

        Args:
            account_id: Owning account
            load_provider_id: Load provider ID
            skip: Pagination offset
            limit: Page size

        Returns:
            List of loads
        """
        return self.db.query(Load).filter(
            Load.account_id == account_id,
            Load.load_provider_id == load_provider_id,
        ).order_by(Load.created_at.desc()).offset(skip).limit(limit).all()

    def reserve_payment(
        self,
        load: Load,
        direction: PaymentDirection,
        amount: Decimal
    ) -> bool:
        """
        Atomically add a payment to the load's running total if it fits the cap.

        Issues a single conditional UPDATE so concurrent writers are checked
        against the true running total. Caps and totals are compared as whole
        paise. Does not commit.

        Args:
            load: Load receiving the payment
            direction: Ledger side
            amount: Payment amount

        Returns:
            True if the row was updated, False if the cap would be exceeded
        """
        paise = to_paise(amount)
        if direction == PaymentDirection.RECEIVED:
            column = Load.amount_received_paise
            cap = Load.freight_paise
            values = {"amount_received_paise": Load.amount_received_paise + paise}
        else:
            column = Load.amount_paid_paise
            cap = Load.truck_freight_paise
            values = {"amount_paid_paise": Load.amount_paid_paise + paise}

        stmt = (
            update(Load)
            .where(
                Load.id == load.id,
                Load.status != LoadStatus.COMPLETED,
                cap.isnot(None),
                column + paise <= cap,
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )

        try:
            result = self.db.execute(stmt)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error reserving {direction.value} payment on load {load.id}: {e}")
            raise DatabaseError("Failed to update Load totals") from e

        # Running totals changed in SQL only
        self.db.expire(load, ["amount_received_paise", "amount_paid_paise"])
        return result.rowcount == 1
