"""Tests for input validation helpers."""
from decimal import Decimal

import pytest

from exceptions import ValidationError
from utils.validation import (
    to_decimal,
    validate_money,
    validate_optional_string,
    validate_phone_number,
    validate_positive_amount,
    validate_required_string,
    validate_upi_id,
)


def test_to_decimal_keeps_float_text():
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal(" 250.50 ") == Decimal("250.50")
    assert to_decimal(7) == Decimal("7")


@pytest.mark.parametrize("value", [None, True, "twelve", [1]])
def test_to_decimal_rejects_non_numbers(value):
    with pytest.raises(ValidationError):
        to_decimal(value)


def test_positive_amount_bounds():
    assert validate_positive_amount("0", allow_zero=True) == 0
    assert validate_positive_amount("100", max_value=Decimal("100")) == Decimal("100")

    with pytest.raises(ValidationError):
        validate_positive_amount("0")
    with pytest.raises(ValidationError):
        validate_positive_amount("100.01", max_value=Decimal("100"))
    with pytest.raises(ValidationError):
        validate_positive_amount("Infinity")


def test_money_allows_two_decimal_places():
    assert validate_money("1234.5") == Decimal("1234.50")
    assert validate_money(Decimal("99.99")) == Decimal("99.99")

    with pytest.raises(ValidationError):
        validate_money("10.005")


def test_required_string_strips_and_limits():
    assert validate_required_string("  Indore ", "Location") == "Indore"

    with pytest.raises(ValidationError):
        validate_required_string(" ", "Location")
    with pytest.raises(ValidationError):
        validate_required_string("x" * 201, "Location", max_length=200)


def test_optional_string_blank_becomes_none():
    assert validate_optional_string("   ", "Notes", 10) is None
    assert validate_optional_string(None, "Notes", 10) is None
    assert validate_optional_string(" ok ", "Notes", 10) == "ok"

    with pytest.raises(ValidationError):
        validate_optional_string("x" * 11, "Notes", 10)


@pytest.mark.parametrize("phone,expected", [
    ("9876543210", "9876543210"),
    ("+91 98765 43210", "9876543210"),
    ("98765-43210", "9876543210"),
])
def test_phone_number_normalized(phone, expected):
    assert validate_phone_number(phone) == expected


@pytest.mark.parametrize("phone", ["", "12345", "98765432101"])
def test_phone_number_rejected(phone):
    with pytest.raises(ValidationError):
        validate_phone_number(phone)


@pytest.mark.parametrize("upi_id", ["ramesh@okicici", "ram.esh-99@ybl", "r_k@paytm"])
def test_upi_id_accepted(upi_id):
    assert validate_upi_id(upi_id) == upi_id


@pytest.mark.parametrize("upi_id", ["ramesh", "r@okicici", "ramesh@1bank", "ramesh@b", ""])
def test_upi_id_rejected(upi_id):
    with pytest.raises(ValidationError):
        validate_upi_id(upi_id)
