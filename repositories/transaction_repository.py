"""Repository for katha transactions."""
from typing import List, Optional

from sqlalchemy.orm import Session

from models import Transaction, PaymentDirection
from repositories.base import BaseRepository
from logging_config import get_logger

logger = get_logger(__name__)


class TransactionRepository(BaseRepository[Transaction]):
    """
    Append-only access to transactions.

    No update or delete: ``create`` (exposed as
    ``append``) is the only write path.
    """

    def __init__(self, db: Session):
        """
        Initialize transaction repository.

        Args:
            db: Database session
        """
        super().__init__(Transaction, db)

    def update(self, *args, **kwargs):
        raise NotImplementedError("Transactions are immutable once recorded")

    def append(self, commit: bool = False, **kwargs) -> Transaction:
        """
        Append a transaction to a load's katha.

        Args:
            commit: Commit immediately (default: flush only)
            **kwargs: Transaction attributes

        Returns:
            Created transaction
        """
        return self.create(commit=commit, **kwargs)

    def list_for_load(
        self,
        load_id: int,
        direction: Optional[PaymentDirection] = None
    ) -> List[Transaction]:
        """
        Get a load's transactions in recording order.

        Args:
            load_id: Load ID
            direction: Optional ledger side filter

        Returns:
            List of transactions
        """
        query = self.db.query(Transaction).filter(Transaction.load_id == load_id)

        if direction is not None:
            query = query.filter(Transaction.payment_direction == direction)

        return query.order_by(
            Transaction.transaction_date.asc(),
            Transaction.id.asc(),
        ).all()
