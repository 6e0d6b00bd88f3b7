"""Database models."""
from models.database import Base, get_db, init_db
from models.load_provider import LoadProvider
from models.truck import Truck, TruckType
from models.load import Load, LoadStatus
from models.transaction import Transaction, PaymentDirection, TransactionType, PaymentMethod

__all__ = [
    "Base",
    "get_db",
    "init_db",
    "LoadProvider",
    "Truck",
    "TruckType",
    "Load",
    "LoadStatus",
    "Transaction",
    "PaymentDirection",
    "TransactionType",
    "PaymentMethod",
]
