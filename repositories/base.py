"""Base repository with common database operations."""
from typing import Generic, TypeVar, Type, Optional, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy import desc, asc

from exceptions import DatabaseError
from logging_config import get_logger

logger = get_logger(__name__)

ModelType = TypeVar("ModelType")


class BaseRepository(Generic[ModelType]):
    """
    Base repository providing common account-scoped operations.

    Generic type pattern for type-safe repository operations. Every model
    handled here carries an ``account_id`` column; reads through
    ``get_for_account``/``list_for_account`` never cross accounts.

    Writes accept ``commit=False`` so the engine can group several writes
    into one logical commit.
    """

    def __init__(self, model: Type[ModelType], db: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            db: Database session
        """
        self.model = model
        self.db = db

    def get_for_account(self, account_id: str, id: int) -> Optional[ModelType]:
        """
        Get entity by ID within an operator account.

        Args:
            account_id: Owning account
            id: Entity ID

        Returns:
            Entity or None if not found in this account
        """
        try:
            return self.db.query(self.model).filter(
                self.model.id == id,
                self.model.account_id == account_id,
            ).first()
        except SQLAlchemyError as e:
            logger.error(f"Error getting {self.model.__name__} {id} for account {account_id}: {e}")
            raise DatabaseError(f"Failed to get {self.model.__name__}") from e

    def list_for_account(
        self,
        account_id: str,
        skip: int = 0,
        limit: int = 100,
        order_by: Optional[str] = None,
        order_direction: str = "desc"
    ) -> List[ModelType]:
        """
        List entities of an account with pagination.

        Args:
            account_id: Owning account
            skip: Number of records to skip
            limit: Maximum number of records to return
            order_by: Field to order by
            order_direction: "asc" or "desc"

        Returns:
            List of entities
        """
        try:
            query = self.db.query(self.model).filter(self.model.account_id == account_id)

            if order_by:
                order_field = getattr(self.model, order_by, None)
                if order_field is not None:
                    if order_direction == "asc":
                        query = query.order_by(asc(order_field))
                    else:
                        query = query.order_by(desc(order_field))

            return query.offset(skip).limit(limit).all()

        except SQLAlchemyError as e:
            logger.error(f"Error listing {self.model.__name__} for account {account_id}: {e}")
            raise DatabaseError(f"Failed to get {self.model.__name__} list") from e

    def create(self, commit: bool = True, **kwargs) -> ModelType:
        """
        Create new entity.

        Args:
            commit: Commit immediately; otherwise only flush
            **kwargs: Entity attributes

        Returns:
            Created entity
        """
        try:
            entity = self.model(**kwargs)
            self.db.add(entity)
            if commit:
                self.db.commit()
                self.db.refresh(entity)
            else:
                self.db.flush()

            logger.info(f"Created {self.model.__name__} with ID {entity.id}")
            return entity

        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error creating {self.model.__name__}: {e}")
            raise DatabaseError(f"Failed to create {self.model.__name__}") from e

    def update(self, entity: ModelType, commit: bool = True, **kwargs) -> ModelType:
        """
        Apply a partial update to an entity.

        Args:
            entity: Entity to update
            commit: Commit immediately; otherwise only flush
            **kwargs: Attributes to update

        Returns:
            Updated entity
        """
        try:
            for key, value in kwargs.items():
                if not hasattr(entity, key):
                    raise AttributeError(f"{self.model.__name__} has no field '{key}'")
                setattr(entity, key, value)

            if commit:
                self.db.commit()
                self.db.refresh(entity)
            else:
                self.db.flush()

            logger.info(f"Updated {self.model.__name__} with ID {entity.id}", fields=sorted(kwargs))
            return entity

        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error updating {self.model.__name__} {entity.id}: {e}")
            raise DatabaseError(f"Failed to update {self.model.__name__}") from e
