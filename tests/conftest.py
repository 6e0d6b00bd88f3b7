"""Shared fixtures: in-memory database, settings and sample directory rows."""
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from config import Settings
from models.database import Base
from models import LoadProvider, Truck, TruckType
from services.events import EventBus, RecordingHandler, WILDCARD
from services.load_service import LoadService, NewLoad

ACCOUNT_ID = "acct-test"
OTHER_ACCOUNT_ID = "acct-other"


@pytest.fixture
def engine():
    """Fresh in-memory SQLite database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    """Database session bound to the test engine."""
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()


@pytest.fixture
def settings():
    """Settings with defaults, isolated from the environment."""
    return Settings(app_env="testing", database_url="sqlite://")


@pytest.fixture
def account_id():
    return ACCOUNT_ID


@pytest.fixture
def recorder():
    """Collects every published domain event."""
    return RecordingHandler()


@pytest.fixture
def event_bus(recorder):
    bus = EventBus()
    bus.subscribe(WILDCARD, recorder)
    return bus


@pytest.fixture
def service(db_session, settings, event_bus):
    return LoadService(db_session, settings=settings, events=event_bus)


@pytest.fixture
def make_provider(db_session):
    """Factory for load providers."""
    def _make(account_id=ACCOUNT_ID, company_name="Sharma Roadlines"):
        provider = LoadProvider(
            account_id=account_id,
            company_name=company_name,
            contact_person="Anil Sharma",
            contact_phone="9876543210",
        )
        db_session.add(provider)
        db_session.commit()
        return provider

    return _make


@pytest.fixture
def make_truck(db_session):
    """Factory for trucks."""
    def _make(account_id=ACCOUNT_ID, truck_number="MP09HH1234", driver_name="Suresh", is_active=True):
        truck = Truck(
            account_id=account_id,
            truck_number=truck_number,
            truck_type=TruckType.OPEN,
            truck_length=Decimal("22"),
            carrying_capacity=Decimal("16"),
            driver_name=driver_name,
            driver_phone="9123456780",
            owner_name="Mahesh Transport",
            owner_phone="9988776655",
            is_active=is_active,
        )
        db_session.add(truck)
        db_session.commit()
        return truck

    return _make


@pytest.fixture
def provider(make_provider):
    return make_provider()


@pytest.fixture
def truck(make_truck):
    return make_truck()


@pytest.fixture
def make_load(service, provider):
    """Factory creating loads through the service."""
    def _make(freight_amount="100000", truck_freight_amount="80000", account_id=ACCOUNT_ID, load_provider_id=None):
        return service.create_load(
            account_id,
            NewLoad(
                load_provider_id=load_provider_id or provider.id,
                loading_location="Indore",
                unloading_location="Mumbai",
                material_description="Soybean bags",
                material_weight="12.5",
                freight_amount=freight_amount,
                truck_freight_amount=truck_freight_amount,
            ),
        )

    return _make
