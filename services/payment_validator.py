"""Payment validation against ledger caps and load state."""
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional

from config import Settings, get_settings
from exceptions import (
    ValidationError,
    ExceedsProviderFreightError,
    ExceedsTruckFreightError,
    TruckFreightNotSetError,
    LoadAlreadyCompletedError,
    BalanceRequiresDeliveryError,
)
from models import LoadStatus, PaymentDirection, TransactionType
from services.ledger import LedgerTotals
from utils.validation import validate_money


class RejectionReason(str, Enum):
    """Why a payment was rejected."""
    INVALID_AMOUNT = "invalid_amount"
    EXCEEDS_PROVIDER_FREIGHT = "exceeds_provider_freight"
    EXCEEDS_TRUCK_FREIGHT = "exceeds_truck_freight"
    TRUCK_FREIGHT_NOT_SET = "truck_freight_not_set"
    LOAD_ALREADY_COMPLETED = "load_already_completed"
    BALANCE_REQUIRES_DELIVERY = "balance_requires_delivery"


_REJECTION_ERRORS = {
    RejectionReason.INVALID_AMOUNT: ValidationError,
    RejectionReason.EXCEEDS_PROVIDER_FREIGHT: ExceedsProviderFreightError,
    RejectionReason.EXCEEDS_TRUCK_FREIGHT: ExceedsTruckFreightError,
    RejectionReason.TRUCK_FREIGHT_NOT_SET: TruckFreightNotSetError,
    RejectionReason.LOAD_ALREADY_COMPLETED: LoadAlreadyCompletedError,
    RejectionReason.BALANCE_REQUIRES_DELIVERY: BalanceRequiresDeliveryError,
}


@dataclass(frozen=True)
class PaymentCheck:
    """Outcome of validating a proposed payment."""

    reason: Optional[RejectionReason] = None
    message: str = ""
    remaining: Optional[Decimal] = None
    amount: Optional[Decimal] = None

    @property
    def ok(self) -> bool:
        return self.reason is None

    def raise_for_rejection(self) -> None:
        """Raise the matching engine exception if the payment was rejected."""
        if self.ok:
            return
        error_cls = _REJECTION_ERRORS[self.reason]
        if issubclass(error_cls, (ExceedsProviderFreightError, ExceedsTruckFreightError)):
            raise error_cls(self.message, remaining=self.remaining)
        raise error_cls(self.message)


class PaymentValidator:
    """
    Check a proposed payment against the load's latest ledger totals.

    Rules run in a fixed order and the first failure wins: amount, received
    cap, truck freight / paid cap, completed load, and (when configured)
    the delivery gate for balance payments. The validator has no side
    effects; the storage-side conditional update in
    ``LoadRepository.reserve_payment`` backs it under concurrent writers.
    """

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        self.max_amount = settings.max_amount
        self.require_delivery_before_balance = settings.require_delivery_before_balance

    def validate(
        self,
        load,
        totals: LedgerTotals,
        direction: PaymentDirection,
        amount,
        transaction_type: Optional[TransactionType] = None
    ) -> PaymentCheck:
        """
        Validate a payment.

        Args:
            load: Load the payment is for
            totals: Ledger totals at the time of recording
            direction: Ledger side
            amount: Proposed amount
            transaction_type: Label the payment would get; needed for the
                delivery gate on balance payments

        Returns:
            PaymentCheck (``ok`` or a rejection reason)
        """
        direction = PaymentDirection(direction)

        try:
            value = validate_money(amount, "Amount", max_value=self.max_amount)
        except ValidationError as e:
            return PaymentCheck(reason=RejectionReason.INVALID_AMOUNT, message=str(e))

        if direction == PaymentDirection.RECEIVED:
            if totals.total_received + value > totals.freight_amount:
                remaining = totals.balance_to_receive
                return PaymentCheck(
                    reason=RejectionReason.EXCEEDS_PROVIDER_FREIGHT,
                    message=(
                        f"Payment of {value} exceeds provider freight; "
                        f"remaining balance to receive is {remaining}"
                    ),
                    remaining=remaining,
                    amount=value,
                )
        else:
            if totals.truck_freight_amount is None:
                return PaymentCheck(
                    reason=RejectionReason.TRUCK_FREIGHT_NOT_SET,
                    message="Truck freight is not set for this load",
                    amount=value,
                )
            if totals.total_paid + value > totals.truck_freight_amount:
                remaining = totals.balance_to_pay
                return PaymentCheck(
                    reason=RejectionReason.EXCEEDS_TRUCK_FREIGHT,
                    message=(
                        f"Payment of {value} exceeds truck freight; "
                        f"remaining balance to pay is {remaining}"
                    ),
                    remaining=remaining,
                    amount=value,
                )

        if load.status == LoadStatus.COMPLETED:
            return PaymentCheck(
                reason=RejectionReason.LOAD_ALREADY_COMPLETED,
                message=f"Load {load.id} is already completed",
                amount=value,
            )

        if (
            self.require_delivery_before_balance
            and transaction_type == TransactionType.BALANCE
            and load.status != LoadStatus.DELIVERED
        ):
            return PaymentCheck(
                reason=RejectionReason.BALANCE_REQUIRES_DELIVERY,
                message=f"Balance payments need a delivered load; load {load.id} is {LoadStatus(load.status).value}",
                amount=value,
            )

        return PaymentCheck(remaining=totals.remaining_for(direction), amount=value)
