"""Custom exceptions for the katha engine."""
from decimal import Decimal
from typing import Optional


class KathaEngineException(Exception):
    """Base exception for katha engine errors."""
    pass


class ValidationError(KathaEngineException):
    """Raised when input data fails validation before any write."""
    pass


class CapExceededError(KathaEngineException):
    """Raised when a payment would push a ledger past its cap."""

    reason = "cap_exceeded"

    def __init__(self, message: str, remaining: Optional[Decimal] = None):
        super().__init__(message)
        self.remaining = remaining


class ExceedsProviderFreightError(CapExceededError):
    """Raised when received payments would exceed the provider freight."""

    reason = "exceeds_provider_freight"


class ExceedsTruckFreightError(CapExceededError):
    """Raised when driver payments would exceed the truck freight."""

    reason = "exceeds_truck_freight"


class PreconditionError(KathaEngineException):
    """Raised when an operation is not allowed in the load's current state."""

    reason = "precondition_failed"


class TruckFreightNotSetError(PreconditionError):
    """Raised when paying a driver on a load without truck freight."""

    reason = "truck_freight_not_set"


class LoadAlreadyCompletedError(PreconditionError):
    """Raised when a completed load is modified."""

    reason = "load_already_completed"


class TruckNotSelectedError(PreconditionError):
    """Raised when assignment is attempted without a truck."""

    reason = "truck_not_selected"


class TruckUnavailableError(PreconditionError):
    """Raised when assigning a truck that is already busy."""

    reason = "truck_unavailable"


class BalanceRequiresDeliveryError(PreconditionError):
    """Raised when a balance payment is gated on delivery."""

    reason = "balance_requires_delivery"


class TruckFreightAgreedError(PreconditionError):
    """Raised when closing a load by hand that settles through its ledgers."""

    reason = "truck_freight_agreed"


class InvalidTransitionError(KathaEngineException):
    """Raised when a status transition is not allowed."""
    pass


class NotFoundError(KathaEngineException):
    """Raised when an entity is not found in the caller's account."""
    pass


class LoadNotFoundError(NotFoundError):
    """Raised when load is not found."""
    pass


class TruckNotFoundError(NotFoundError):
    """Raised when truck is not found."""
    pass


class LoadProviderNotFoundError(NotFoundError):
    """Raised when load provider is not found."""
    pass


class ConfigurationError(KathaEngineException):
    """Raised when configuration is invalid or missing."""
    pass


class DatabaseError(KathaEngineException):
    """Raised when database operations fail."""
    pass
