"""Application-wide constants.

Tunable limits (maximum amount, maximum material weight, balance gating) are
configured in config.Settings; use get_settings() to read them.
"""

# Load statuses
LOAD_PENDING = "pending"
LOAD_ASSIGNED = "assigned"
LOAD_IN_TRANSIT = "in_transit"
LOAD_DELIVERED = "delivered"
LOAD_COMPLETED = "completed"

# Payment directions
DIRECTION_RECEIVED = "received"
DIRECTION_PAID = "paid"

# Transaction labels
TRANSACTION_ADVANCE = "advance"
TRANSACTION_BALANCE = "balance"

# Payment methods
PAYMENT_CASH = "cash"
PAYMENT_UPI = "upi"
PAYMENT_BANK_TRANSFER = "bank_transfer"

# Truck types
TRUCK_OPEN = "open"
TRUCK_CONTAINER = "container"

# Domain event types
EVENT_LOAD_CREATED = "load_created"
EVENT_TRUCK_ASSIGNED = "truck_assigned"
EVENT_LOAD_STATUS_CHANGED = "load_status_changed"
EVENT_PAYMENT_RECORDED = "payment_recorded"
EVENT_LOAD_COMPLETED = "load_completed"
EVENT_TRUCK_AVAILABILITY_CHANGED = "truck_availability_changed"

# Money
MONEY_PRECISION = 12
MONEY_SCALE = 2

# Validation limits
MAX_LOCATION_LENGTH = 200
MAX_MATERIAL_DESCRIPTION_LENGTH = 500
MAX_PAYMENT_DETAILS_LENGTH = 500
MAX_NOTES_LENGTH = 1000
MAX_PARTY_NAME_LENGTH = 200
MAX_UPI_ID_LENGTH = 100
MAX_BANK_NAME_LENGTH = 100
MAX_ACCOUNT_NUMBER_LENGTH = 50
MAX_IFSC_CODE_LENGTH = 20
MAX_ACCOUNT_ID_LENGTH = 64

# Date formats
DATE_FORMAT_ISO = "%Y-%m-%d"
DATETIME_FORMAT_ISO = "%Y-%m-%dT%H:%M:%S"
DATE_FORMAT_DISPLAY = "%d/%m/%Y"
DATETIME_FORMAT_DISPLAY = "%d/%m/%Y %I:%M %p"

# HTTP headers
ACCOUNT_ID_HEADER = "X-Account-Id"
REQUEST_ID_HEADER = "X-Request-ID"
