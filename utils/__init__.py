"""Utility modules."""
from utils.validation import (
    to_decimal,
    validate_positive_amount,
    validate_money,
    validate_required_string,
    validate_optional_string,
    validate_phone_number,
    validate_upi_id,
)
from utils.date_helpers import (
    get_current_utc,
    utc_timestamp,
    convert_to_timezone,
    format_date_display,
    format_local_timestamp,
)

__all__ = [
    "to_decimal",
    "validate_positive_amount",
    "validate_money",
    "validate_required_string",
    "validate_optional_string",
    "validate_phone_number",
    "validate_upi_id",
    "get_current_utc",
    "utc_timestamp",
    "convert_to_timezone",
    "format_date_display",
    "format_local_timestamp",
]
