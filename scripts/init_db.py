#!/usr/bin/env python
"""Initialize database with sample data."""
import sys
import os
from decimal import Decimal

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from exceptions import DatabaseError, ValidationError
from models import init_db, TruckType
from models.database import db_session
from repositories import LoadProviderRepository, TruckRepository
from utils.validation import validate_phone_number

SAMPLE_ACCOUNT_ID = "demo-account"

SAMPLE_PROVIDER = {
    "company_name": "Sample Logistics",
    "contact_person": "Ramesh Kumar",
    "contact_phone": "+91 98765 43210",
    "email": "dispatch@example.com",
    "address": "Transport Nagar, Indore",
}

SAMPLE_TRUCK = {
    "truck_number": "MP09HH1234",
    "truck_type": TruckType.OPEN,
    "truck_length": Decimal("22"),
    "carrying_capacity": Decimal("16"),
    "driver_name": "Suresh",
    "driver_phone": "+91 91234 56780",
    "owner_name": "Mahesh Transport",
    "owner_phone": "99887 76655",
    "is_active": True,
}


def create_sample_directory(db, account_id: str = SAMPLE_ACCOUNT_ID):
    """Create a sample load provider and an available truck."""
    providers = LoadProviderRepository(db)
    trucks = TruckRepository(db)

    if providers.get_by_company_name(account_id, SAMPLE_PROVIDER["company_name"]):
        print("Sample provider already exists")
    else:
        provider = providers.create(
            account_id=account_id,
            **{
                **SAMPLE_PROVIDER,
                "contact_phone": validate_phone_number(SAMPLE_PROVIDER["contact_phone"]),
            },
        )
        print(f"✅ Created sample provider: {provider.company_name}")

    if trucks.get_by_truck_number(account_id, SAMPLE_TRUCK["truck_number"]):
        print("Sample truck already exists")
    else:
        truck = trucks.create(
            account_id=account_id,
            **{
                **SAMPLE_TRUCK,
                "driver_phone": validate_phone_number(SAMPLE_TRUCK["driver_phone"]),
                "owner_phone": validate_phone_number(SAMPLE_TRUCK["owner_phone"]),
            },
        )
        print(f"✅ Created sample truck: {truck.truck_number}")


def main():
    """Initialize database."""
    print("🗄️  Initializing database...")

    try:
        init_db()
        print("✅ Database tables created")

        with db_session() as db:
            create_sample_directory(db)

        print("✅ Database initialization complete!")

    except (DatabaseError, ValidationError) as e:
        print(f"❌ Error initializing database: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
