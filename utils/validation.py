"""Validation utilities for data integrity."""
import re
from decimal import Decimal, InvalidOperation
from typing import Optional

from exceptions import ValidationError

UPI_ID_PATTERN = re.compile(r'^[a-zA-Z0-9.\-_]{2,}@[a-zA-Z]{2,}$')
MONEY_QUANTUM = Decimal("0.01")


def to_decimal(value, field_name: str = "Amount") -> Decimal:
    """
    Convert a numeric input to Decimal without going through float text.

    Args:
        value: int, float, Decimal or numeric string
        field_name: Name of field for error message

    Returns:
        Decimal value (may be NaN or infinite; callers check finiteness)

    Raises:
        ValidationError: If value is not numeric
    """
    if value is None:
        raise ValidationError(f"{field_name} cannot be None")

    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number, got {type(value)}")

    if isinstance(value, Decimal):
        return value

    if isinstance(value, (int, float)):
        # str() keeps 0.1 as Decimal("0.1") instead of its binary expansion
        return Decimal(str(value))

    if isinstance(value, str):
        try:
            return Decimal(value.strip())
        except InvalidOperation as e:
            raise ValidationError(f"{field_name} must be a number, got {value!r}") from e

    raise ValidationError(f"{field_name} must be a number, got {type(value)}")


def validate_positive_amount(
    amount,
    field_name: str = "Amount",
    allow_zero: bool = False,
    max_value: Optional[Decimal] = None
) -> Decimal:
    """
    Validate that amount is a finite positive number (and optionally non-zero).

    Args:
        amount: Amount to validate
        field_name: Name of field for error message
        allow_zero: Whether to allow zero values
        max_value: Optional inclusive upper bound

    Returns:
        Validated amount as Decimal

    Raises:
        ValidationError: If amount is invalid
    """
    value = to_decimal(amount, field_name)

    if not value.is_finite():
        raise ValidationError(f"{field_name} must be a finite number, got {amount}")

    if allow_zero:
        if value < 0:
            raise ValidationError(f"{field_name} must be non-negative, got {amount}")
    else:
        if value <= 0:
            raise ValidationError(f"{field_name} must be positive, got {amount}")

    if max_value is not None and value > max_value:
        raise ValidationError(f"{field_name} exceeds maximum ({max_value}), got {amount}")

    return value


def validate_money(
    amount,
    field_name: str = "Amount",
    max_value: Optional[Decimal] = None
) -> Decimal:
    """
    Validate a positive money amount with at most two decimal places.

    Args:
        amount: Amount to validate
        field_name: Name of field for error message
        max_value: Optional inclusive upper bound

    Returns:
        Amount quantized to paise

    Raises:
        ValidationError: If amount is invalid
    """
    value = validate_positive_amount(amount, field_name, max_value=max_value)
    quantized = value.quantize(MONEY_QUANTUM)
    if quantized != value:
        raise ValidationError(f"{field_name} must have at most 2 decimal places, got {amount}")
    return quantized


def to_paise(amount: Decimal) -> int:
    """Whole paise for a rupee amount already validated to 2 decimal places."""
    return int((Decimal(amount) * 100).to_integral_value())


def from_paise(paise: int) -> Decimal:
    """Rupee amount for a whole number of paise."""
    return (Decimal(paise) / 100).quantize(MONEY_QUANTUM)


def validate_required_string(
    value: Optional[str],
    field_name: str,
    max_length: Optional[int] = None
) -> str:
    """
    Validate required string field.

    Args:
        value: String value to validate
        field_name: Name of field for error message
        max_length: Maximum allowed length

    Returns:
        Validated string (stripped)

    Raises:
        ValidationError: If string is invalid
    """
    if not value:
        raise ValidationError(f"{field_name} is required")

    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string, got {type(value)}")

    stripped = value.strip()

    if not stripped:
        raise ValidationError(f"{field_name} cannot be empty or whitespace")

    if max_length and len(stripped) > max_length:
        raise ValidationError(
            f"{field_name} must be at most {max_length} characters, "
            f"got {len(stripped)}"
        )

    return stripped


def validate_optional_string(
    value: Optional[str],
    field_name: str,
    max_length: int
) -> Optional[str]:
    """
    Validate an optional free-text field.

    Returns:
        Stripped string, or None when empty
    """
    if value is None:
        return None

    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string, got {type(value)}")

    stripped = value.strip()
    if not stripped:
        return None

    if len(stripped) > max_length:
        raise ValidationError(
            f"{field_name} must be at most {max_length} characters, "
            f"got {len(stripped)}"
        )

    return stripped


def validate_phone_number(phone: str) -> str:
    """
    Validate and normalize Indian mobile number.

    Args:
        phone: Phone number to validate

    Returns:
        Normalized phone number (digits only, 10 digits)

    Raises:
        ValidationError: If phone number is invalid
    """
    if not phone:
        raise ValidationError("Phone number cannot be empty")

    digits = re.sub(r'\D', '', phone)

    # Strip country code
    if len(digits) == 12 and digits.startswith("91"):
        digits = digits[2:]

    if len(digits) != 10:
        raise ValidationError(
            f"Phone number must be 10 digits, got {len(digits)}: {phone}"
        )

    return digits


def validate_upi_id(upi_id: str) -> str:
    """
    Validate UPI handle format (username@bank).

    Args:
        upi_id: UPI handle

    Returns:
        Stripped UPI handle

    Raises:
        ValidationError: If the handle is malformed
    """
    stripped = (upi_id or "").strip()
    if not UPI_ID_PATTERN.match(stripped):
        raise ValidationError(
            f"Invalid UPI ID format (should be username@bank): {upi_id}"
        )
    return stripped
