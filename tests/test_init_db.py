"""Tests for the sample data seeding script."""
import pytest

from exceptions import ValidationError
from models import LoadProvider, Truck
from repositories import LoadProviderRepository, TruckRepository
from scripts import init_db


def test_seed_stores_normalized_phone_numbers(db_session, account_id):
    init_db.create_sample_directory(db_session, account_id)

    provider = LoadProviderRepository(db_session).get_by_company_name(account_id, "Sample Logistics")
    truck = TruckRepository(db_session).get_by_truck_number(account_id, "MP09HH1234")

    assert provider.contact_phone == "9876543210"
    assert (truck.driver_phone, truck.owner_phone) == ("9123456780", "9988776655")
    assert truck.is_active is True


def test_seed_runs_once_per_account(db_session, account_id, capsys):
    init_db.create_sample_directory(db_session, account_id)
    init_db.create_sample_directory(db_session, account_id)

    assert db_session.query(LoadProvider).filter_by(account_id=account_id).count() == 1
    assert db_session.query(Truck).filter_by(account_id=account_id).count() == 1
    assert "Sample truck already exists" in capsys.readouterr().out


def test_seed_refuses_malformed_phone(db_session, account_id, monkeypatch):
    monkeypatch.setitem(init_db.SAMPLE_TRUCK, "driver_phone", "12345")

    with pytest.raises(ValidationError):
        init_db.create_sample_directory(db_session, account_id)

    assert db_session.query(Truck).filter_by(account_id=account_id).count() == 0
