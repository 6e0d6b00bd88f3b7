"""Load model."""
from decimal import Decimal
from enum import Enum

from sqlalchemy import (
    BigInteger, Column, Integer, String, Numeric, DateTime, ForeignKey, Text, CheckConstraint,
    Enum as SQLEnum,
)
from sqlalchemy.orm import relationship

from constants import (
    LOAD_PENDING,
    LOAD_ASSIGNED,
    LOAD_IN_TRANSIT,
    LOAD_DELIVERED,
    LOAD_COMPLETED,
    MONEY_PRECISION,
    MONEY_SCALE,
    MAX_ACCOUNT_ID_LENGTH,
)
from models.database import Base
from utils.date_helpers import utc_timestamp
from utils.validation import from_paise


class LoadStatus(str, Enum):
    """Load lifecycle status."""
    PENDING = LOAD_PENDING
    ASSIGNED = LOAD_ASSIGNED
    IN_TRANSIT = LOAD_IN_TRANSIT
    DELIVERED = LOAD_DELIVERED
    COMPLETED = LOAD_COMPLETED


class Load(Base):
    """Freight job linking a provider, a truck and the two payment ledgers."""

    __tablename__ = "loads"
    __table_args__ = (
        CheckConstraint("freight_amount > 0", name="ck_loads_freight_positive"),
        CheckConstraint("material_weight > 0", name="ck_loads_weight_positive"),
        CheckConstraint(
            "truck_freight_amount IS NULL OR "
            "(truck_freight_amount > 0 AND truck_freight_amount <= freight_amount)",
            name="ck_loads_truck_freight_within_freight",
        ),
        CheckConstraint(
            "amount_received_paise >= 0 AND amount_received_paise <= freight_paise",
            name="ck_loads_received_within_freight",
        ),
        CheckConstraint(
            "amount_paid_paise >= 0 AND amount_paid_paise <= COALESCE(truck_freight_paise, 0)",
            name="ck_loads_paid_within_truck_freight",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    account_id = Column(String(MAX_ACCOUNT_ID_LENGTH), nullable=False, index=True)

    # References
    load_provider_id = Column(Integer, ForeignKey("load_providers.id"), nullable=False, index=True)
    truck_id = Column(Integer, ForeignKey("trucks.id"), index=True)

    # Route and material
    loading_location = Column(String(200), nullable=False)
    unloading_location = Column(String(200), nullable=False)
    material_description = Column(Text, nullable=False)
    material_weight = Column(Numeric(8, 2), nullable=False)  # tons

    # Money
    freight_amount = Column(Numeric(MONEY_PRECISION, MONEY_SCALE), nullable=False)
    truck_freight_amount = Column(Numeric(MONEY_PRECISION, MONEY_SCALE))
    profit_amount = Column(Numeric(MONEY_PRECISION, MONEY_SCALE))

    # Integer paise mirrors of the caps and running totals. Cap checks compare
    # these so no backend rounds fractional rupees; the transactions table stays
    # the source of truth for the katha.
    freight_paise = Column(BigInteger, nullable=False)
    truck_freight_paise = Column(BigInteger)
    amount_received_paise = Column(BigInteger, nullable=False, default=0)
    amount_paid_paise = Column(BigInteger, nullable=False, default=0)

    # Status
    status = Column(
        SQLEnum(LoadStatus, name="load_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=LoadStatus.PENDING,
        index=True,
    )

    # Lifecycle timestamps
    assigned_at = Column(DateTime)
    loading_completed_at = Column(DateTime)
    delivery_completed_at = Column(DateTime)
    completed_at = Column(DateTime)

    # Timestamps
    created_at = Column(DateTime, default=utc_timestamp)
    updated_at = Column(DateTime, default=utc_timestamp, onupdate=utc_timestamp)

    # Relationships
    load_provider = relationship("LoadProvider", back_populates="loads")
    truck = relationship("Truck", back_populates="loads")
    transactions = relationship(
        "Transaction",
        back_populates="load",
        order_by="Transaction.transaction_date",
    )

    @property
    def is_completed(self) -> bool:
        """Completed loads accept no further assignment or payment."""
        return self.status == LoadStatus.COMPLETED

    @property
    def amount_received(self) -> Decimal:
        """Rupees received from the provider so far."""
        return from_paise(self.amount_received_paise or 0)

    @property
    def amount_paid(self) -> Decimal:
        """Rupees paid to the truck so far."""
        return from_paise(self.amount_paid_paise or 0)

    def __repr__(self):
        return f"<Load(id={self.id}, status='{self.status}', freight={self.freight_amount})>"
