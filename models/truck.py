"""Truck model."""
from enum import Enum
from sqlalchemy import Column, Integer, String, Numeric, DateTime, Boolean, CheckConstraint, Enum as SQLEnum
from sqlalchemy.orm import relationship

from constants import TRUCK_OPEN, TRUCK_CONTAINER, MAX_ACCOUNT_ID_LENGTH
from models.database import Base
from utils.date_helpers import utc_timestamp


class TruckType(str, Enum):
    """Truck body types."""
    OPEN = TRUCK_OPEN
    CONTAINER = TRUCK_CONTAINER


class Truck(Base):
    """Fleet truck with its driver and owner contacts."""

    __tablename__ = "trucks"
    __table_args__ = (
        CheckConstraint("truck_length > 0", name="ck_trucks_length_positive"),
        CheckConstraint("carrying_capacity > 0", name="ck_trucks_capacity_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)
    account_id = Column(String(MAX_ACCOUNT_ID_LENGTH), nullable=False, index=True)

    truck_number = Column(String(20), nullable=False)
    truck_type = Column(
        SQLEnum(TruckType, name="truck_type", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    truck_length = Column(Numeric(6, 2), nullable=False)  # feet
    carrying_capacity = Column(Numeric(8, 2), nullable=False)  # tons

    # Driver
    driver_name = Column(String(100), nullable=False)
    driver_phone = Column(String(20), nullable=False)

    # Owner
    owner_name = Column(String(100), nullable=False)
    owner_phone = Column(String(20), nullable=False)

    # Third-party contact
    contact_person = Column(String(100))
    contact_person_phone = Column(String(20))

    # Available for assignment
    is_active = Column(Boolean, nullable=False, default=True)

    # Timestamps
    created_at = Column(DateTime, default=utc_timestamp)
    updated_at = Column(DateTime, default=utc_timestamp, onupdate=utc_timestamp)

    # Relationships
    loads = relationship("Load", back_populates="truck")

    def __repr__(self):
        return f"<Truck(id={self.id}, number='{self.truck_number}', active={self.is_active})>"
