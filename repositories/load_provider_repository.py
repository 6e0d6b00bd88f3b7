"""Repository for load provider operations."""
from typing import Optional

from sqlalchemy.orm import Session

from models import LoadProvider
from repositories.base import BaseRepository


class LoadProviderRepository(BaseRepository[LoadProvider]):
    """Repository for load provider lookups."""

    def __init__(self, db: Session):
        """
        Initialize load provider repository.

        Args:
            db: Database session
        """
        super().__init__(LoadProvider, db)

    def get_by_company_name(self, account_id: str, company_name: str) -> Optional[LoadProvider]:
        """
        Get provider by company name.

        Args:
            account_id: Owning account
            company_name: Company name

        Returns:
            LoadProvider or None
        """
        return self.db.query(LoadProvider).filter(
            LoadProvider.account_id == account_id,
            LoadProvider.company_name == company_name,
        ).first()
