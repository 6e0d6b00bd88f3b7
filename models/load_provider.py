"""Load provider model."""
from sqlalchemy import Column, Integer, String, DateTime, Text
from sqlalchemy.orm import relationship

from constants import MAX_ACCOUNT_ID_LENGTH
from models.database import Base
from utils.date_helpers import utc_timestamp


class LoadProvider(Base):
    """Company that hands off loads to the broker."""

    __tablename__ = "load_providers"

    id = Column(Integer, primary_key=True, index=True)
    account_id = Column(String(MAX_ACCOUNT_ID_LENGTH), nullable=False, index=True)

    company_name = Column(String(200), nullable=False)
    contact_person = Column(String(100), nullable=False)
    contact_phone = Column(String(20), nullable=False)
    email = Column(String(255))
    address = Column(Text)

    # Timestamps
    created_at = Column(DateTime, default=utc_timestamp)
    updated_at = Column(DateTime, default=utc_timestamp, onupdate=utc_timestamp)

    # Relationships
    loads = relationship("Load", back_populates="load_provider")

    def __repr__(self):
        return f"<LoadProvider(id={self.id}, company='{self.company_name}')>"
