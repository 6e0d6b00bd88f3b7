"""Katha transaction models."""
from enum import Enum
from sqlalchemy import (
    Column, Integer, String, Numeric, DateTime, ForeignKey, Text, CheckConstraint, UniqueConstraint,
    Enum as SQLEnum,
)
from sqlalchemy.orm import relationship

from constants import (
    DIRECTION_RECEIVED,
    DIRECTION_PAID,
    TRANSACTION_ADVANCE,
    TRANSACTION_BALANCE,
    PAYMENT_CASH,
    PAYMENT_UPI,
    PAYMENT_BANK_TRANSFER,
    MONEY_PRECISION,
    MONEY_SCALE,
    MAX_ACCOUNT_ID_LENGTH,
)
from models.database import Base
from utils.date_helpers import utc_timestamp


class PaymentDirection(str, Enum):
    """Which side of the load a payment settles."""
    RECEIVED = DIRECTION_RECEIVED  # from the load provider
    PAID = DIRECTION_PAID  # to the driver / truck


class TransactionType(str, Enum):
    """First payment per direction is the advance; every later one is a balance."""
    ADVANCE = TRANSACTION_ADVANCE
    BALANCE = TRANSACTION_BALANCE


class PaymentMethod(str, Enum):
    """How the money moved."""
    CASH = PAYMENT_CASH
    UPI = PAYMENT_UPI
    BANK_TRANSFER = PAYMENT_BANK_TRANSFER


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class Transaction(Base):
    """Append-only katha entry for a load."""

    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_transactions_amount_positive"),
        CheckConstraint("payment_sequence > 0", name="ck_transactions_sequence_positive"),
        UniqueConstraint(
            "load_id", "payment_direction", "payment_sequence",
            name="uq_transactions_load_direction_sequence",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    account_id = Column(String(MAX_ACCOUNT_ID_LENGTH), nullable=False, index=True)

    load_id = Column(Integer, ForeignKey("loads.id"), nullable=False, index=True)

    # Ledger position
    payment_direction = Column(
        SQLEnum(PaymentDirection, name="payment_direction", values_callable=_enum_values),
        nullable=False,
    )
    transaction_type = Column(
        SQLEnum(TransactionType, name="transaction_type", values_callable=_enum_values),
        nullable=False,
    )
    payment_sequence = Column(Integer, nullable=False)

    # Payment
    amount = Column(Numeric(MONEY_PRECISION, MONEY_SCALE), nullable=False)
    payment_method = Column(
        SQLEnum(PaymentMethod, name="payment_method", values_callable=_enum_values),
        nullable=False,
    )
    payment_details = Column(String(500))
    upi_id = Column(String(100))
    bank_name = Column(String(100))
    account_number = Column(String(50))
    ifsc_code = Column(String(20))

    # Counterparty
    party_name = Column(String(200))
    notes = Column(Text)

    # Timestamps
    transaction_date = Column(DateTime, nullable=False, default=utc_timestamp, index=True)
    created_at = Column(DateTime, default=utc_timestamp)

    # Relationships
    load = relationship("Load", back_populates="transactions")

    def __repr__(self):
        return (
            f"<Transaction(load={self.load_id}, {self.payment_direction} "
            f"#{self.payment_sequence} {self.transaction_type}, amount={self.amount})>"
        )
