"""Repository pattern for database access."""
from repositories.base import BaseRepository
from repositories.load_repository import LoadRepository
from repositories.load_provider_repository import LoadProviderRepository
from repositories.transaction_repository import TransactionRepository
from repositories.truck_repository import TruckRepository

__all__ = [
    "BaseRepository",
    "LoadRepository",
    "LoadProviderRepository",
    "TransactionRepository",
    "TruckRepository",
]
