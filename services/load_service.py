"""Load lifecycle and payment reconciliation service.

Every public method takes the operator's ``account_id`` explicitly and runs
as one logical commit: validation, the storage writes, settlement and truck
availability all land together or not at all. Domain events go out only
after the commit succeeds.
"""
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from config import Settings, get_settings
from constants import (
    EVENT_LOAD_CREATED,
    EVENT_TRUCK_ASSIGNED,
    EVENT_LOAD_STATUS_CHANGED,
    EVENT_PAYMENT_RECORDED,
    EVENT_LOAD_COMPLETED,
    EVENT_TRUCK_AVAILABILITY_CHANGED,
    MAX_LOCATION_LENGTH,
    MAX_MATERIAL_DESCRIPTION_LENGTH,
    MAX_PAYMENT_DETAILS_LENGTH,
    MAX_NOTES_LENGTH,
    MAX_BANK_NAME_LENGTH,
    MAX_ACCOUNT_NUMBER_LENGTH,
    MAX_IFSC_CODE_LENGTH,
    MAX_UPI_ID_LENGTH,
    MAX_ACCOUNT_ID_LENGTH,
)
from exceptions import (
    ValidationError,
    ExceedsProviderFreightError,
    ExceedsTruckFreightError,
    InvalidTransitionError,
    LoadAlreadyCompletedError,
    TruckNotSelectedError,
    TruckFreightAgreedError,
    LoadNotFoundError,
    TruckNotFoundError,
    LoadProviderNotFoundError,
    DatabaseError,
)
from models import Load, LoadStatus, Transaction, TransactionType, Truck, PaymentDirection, PaymentMethod
from repositories import LoadRepository, LoadProviderRepository, TransactionRepository, TruckRepository
from services.events import DomainEvent, EventBus
from services.ledger import LedgerTotals, expected_profit
from services.load_state_machine import LoadStateMachine, next_manual_status
from services.payment_validator import PaymentValidator
from services.settlement import SettlementTrigger
from services.transaction_sequencer import next_sequence, resolve_party_name
from services.truck_availability import TruckAvailabilityManager
from utils.date_helpers import format_local_timestamp
from utils.validation import (
    to_paise,
    validate_money,
    validate_optional_string,
    validate_positive_amount,
    validate_required_string,
    validate_upi_id,
)
from logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class NewLoad:
    """Input for creating a load."""

    load_provider_id: int
    loading_location: str
    unloading_location: str
    material_description: str
    material_weight: Any
    freight_amount: Any
    truck_freight_amount: Any = None


@dataclass
class PaymentRequest:
    """Input for recording one payment on a load."""

    direction: str
    amount: Any
    payment_method: str
    payment_details: Optional[str] = None
    notes: Optional[str] = None
    upi_id: Optional[str] = None
    bank_name: Optional[str] = None
    account_number: Optional[str] = None
    ifsc_code: Optional[str] = None


@dataclass
class PaymentResult:
    """A recorded transaction and the ledger state right after it."""

    transaction: Transaction
    totals: LedgerTotals
    load_completed: bool


@dataclass
class TimelineEntry:
    """One row of a load's transaction timeline."""

    id: int
    direction: str
    transaction_type: str
    sequence: int
    amount: Decimal
    payment_method: str
    party_name: Optional[str]
    payment_details: Optional[str]
    notes: Optional[str]
    transaction_date: datetime
    display_date: str


@dataclass
class KathaSummary:
    """Read-only projection of a load's running account book."""

    load_id: int
    status: str
    provider_name: Optional[str]
    truck_number: Optional[str]
    driver_name: Optional[str]
    loading_location: str
    unloading_location: str
    totals: LedgerTotals
    timeline: List[TimelineEntry] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "load_id": self.load_id,
            "status": self.status,
            "provider_name": self.provider_name,
            "truck_number": self.truck_number,
            "driver_name": self.driver_name,
            "loading_location": self.loading_location,
            "unloading_location": self.unloading_location,
            "totals": self.totals.to_dict(),
            "timeline": [entry.__dict__.copy() for entry in self.timeline],
        }


class LoadService:
    """Engine facade for load assignment, status and payments."""

    def __init__(
        self,
        db: Session,
        settings: Optional[Settings] = None,
        events: Optional[EventBus] = None
    ):
        """
        Initialize load service.

        Args:
            db: Database session
            settings: Engine settings (default: cached application settings)
            events: Event bus for observers (default: a private bus)
        """
        self.db = db
        self.settings = settings or get_settings()
        self.events = events or EventBus()

        self.loads = LoadRepository(db)
        self.providers = LoadProviderRepository(db)
        self.transactions = TransactionRepository(db)
        self.trucks = TruckRepository(db)

        self.availability = TruckAvailabilityManager(self.trucks)
        self.state_machine = LoadStateMachine(self.availability)
        self.validator = PaymentValidator(self.settings)
        self.settlement = SettlementTrigger(self.state_machine)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_load(self, account_id: str, load_id: int) -> Load:
        """Get a load of the account or raise LoadNotFoundError."""
        load = self.loads.get_for_account(_require_account(account_id), load_id)
        if load is None:
            raise LoadNotFoundError(f"Load {load_id} not found")
        return load

    def list_loads(
        self,
        account_id: str,
        status: Optional[LoadStatus] = None,
        load_provider_id: Optional[int] = None,
        skip: int = 0,
        limit: Optional[int] = None
    ) -> List[Load]:
        """List an account's loads, newest first, by status or by provider."""
        account_id = _require_account(account_id)
        limit = min(limit or self.settings.default_page_size, self.settings.max_page_size)
        if status is not None:
            return self.loads.get_by_status(account_id, LoadStatus(status), skip=skip, limit=limit)
        if load_provider_id is not None:
            return self.loads.get_by_provider(account_id, load_provider_id, skip=skip, limit=limit)
        return self.loads.list_for_account(account_id, skip=skip, limit=limit, order_by="created_at")

    def available_trucks(self, account_id: str) -> List[Truck]:
        """Trucks that can be offered for assignment."""
        return self.availability.available_trucks(_require_account(account_id))

    def get_totals(self, account_id: str, load_id: int) -> LedgerTotals:
        """Ledger totals recomputed from persisted transactions."""
        load = self.get_load(account_id, load_id)
        return LedgerTotals.for_load(load, self.transactions.list_for_load(load.id))

    def get_katha(self, account_id: str, load_id: int) -> KathaSummary:
        """
        Build the katha card for a load from committed rows.

        Args:
            account_id: Operator account
            load_id: Load ID

        Returns:
            KathaSummary with totals and a chronological timeline
        """
        load = self.get_load(account_id, load_id)
        transactions = self.transactions.list_for_load(load.id)
        totals = LedgerTotals.for_load(load, transactions)

        timeline = [
            TimelineEntry(
                id=txn.id,
                direction=PaymentDirection(txn.payment_direction).value,
                transaction_type=TransactionType(txn.transaction_type).value,
                sequence=txn.payment_sequence,
                amount=Decimal(txn.amount),
                payment_method=PaymentMethod(txn.payment_method).value,
                party_name=txn.party_name,
                payment_details=txn.payment_details,
                notes=txn.notes,
                transaction_date=txn.transaction_date,
                display_date=format_local_timestamp(txn.transaction_date, self.settings.display_timezone),
            )
            for txn in transactions
        ]

        truck = load.truck
        return KathaSummary(
            load_id=load.id,
            status=LoadStatus(load.status).value,
            provider_name=load.load_provider.company_name if load.load_provider else None,
            truck_number=truck.truck_number if truck else None,
            driver_name=truck.driver_name if truck else None,
            loading_location=load.loading_location,
            unloading_location=load.unloading_location,
            totals=totals,
            timeline=timeline,
        )

    @staticmethod
    def preview_profit(freight_amount, truck_freight_amount=None) -> Optional[Decimal]:
        """
        Profit shown on the create form before saving. Never persisted;
        the stored profit is derived again on create.
        """
        try:
            freight = validate_positive_amount(freight_amount, "Freight amount")
            truck_freight = (
                validate_positive_amount(truck_freight_amount, "Truck freight amount")
                if truck_freight_amount is not None else None
            )
        except ValidationError:
            return None
        return expected_profit(freight, truck_freight)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create_load(self, account_id: str, data: NewLoad) -> Load:
        """
        Create a pending load.

        Raises:
            ValidationError: Bad input, including truck freight above freight
            LoadProviderNotFoundError: Provider not in this account
        """
        account_id = _require_account(account_id)

        loading_location = validate_required_string(
            data.loading_location, "Loading location", MAX_LOCATION_LENGTH
        )
        unloading_location = validate_required_string(
            data.unloading_location, "Unloading location", MAX_LOCATION_LENGTH
        )
        material_description = validate_required_string(
            data.material_description, "Material description", MAX_MATERIAL_DESCRIPTION_LENGTH
        )
        material_weight = validate_positive_amount(
            data.material_weight, "Material weight", max_value=self.settings.max_material_weight
        )
        freight_amount = validate_money(
            data.freight_amount, "Freight amount", max_value=self.settings.max_amount
        )
        truck_freight_amount = None
        if data.truck_freight_amount is not None:
            truck_freight_amount = validate_money(
                data.truck_freight_amount, "Truck freight amount", max_value=self.settings.max_amount
            )
            if truck_freight_amount > freight_amount:
                raise ValidationError("Truck freight cannot exceed provider freight")

        provider = self.providers.get_for_account(account_id, data.load_provider_id)
        if provider is None:
            raise LoadProviderNotFoundError(f"Load provider {data.load_provider_id} not found")

        with self._unit_of_work() as pending_events:
            load = self.loads.create(
                commit=False,
                account_id=account_id,
                load_provider_id=provider.id,
                loading_location=loading_location,
                unloading_location=unloading_location,
                material_description=material_description,
                material_weight=material_weight,
                freight_amount=freight_amount,
                truck_freight_amount=truck_freight_amount,
                freight_paise=to_paise(freight_amount),
                truck_freight_paise=(
                    to_paise(truck_freight_amount) if truck_freight_amount is not None else None
                ),
                amount_received_paise=0,
                amount_paid_paise=0,
                profit_amount=expected_profit(freight_amount, truck_freight_amount),
                status=LoadStatus.PENDING,
            )
            pending_events.append(DomainEvent(
                event_type=EVENT_LOAD_CREATED,
                account_id=account_id,
                load_id=load.id,
                payload={"freight_amount": str(freight_amount), "load_provider_id": provider.id},
            ))

        logger.info("load_created", load_id=load.id, account_id=account_id)
        return load

    def assign_truck(self, account_id: str, load_id: int, truck_id: Optional[int]) -> Load:
        """
        pending -> assigned with the selected truck, which becomes busy.

        Raises:
            TruckNotSelectedError: No truck given
            TruckNotFoundError: Truck not in this account
            TruckUnavailableError: Truck already busy
            LoadAlreadyCompletedError / InvalidTransitionError: Load not pending
        """
        account_id = _require_account(account_id)
        if truck_id is None:
            raise TruckNotSelectedError("Select a truck before assigning the load")

        with self._unit_of_work() as pending_events:
            load = self._lock_load(account_id, load_id)
            truck = self.trucks.get_for_account(account_id, truck_id)
            if truck is None:
                raise TruckNotFoundError(f"Truck {truck_id} not found")

            previous = self.state_machine.assign(load, truck)
            self.db.flush()

            pending_events.extend([
                DomainEvent(
                    event_type=EVENT_TRUCK_ASSIGNED,
                    account_id=account_id,
                    load_id=load.id,
                    payload={"truck_id": truck.id, "truck_number": truck.truck_number},
                ),
                self._status_event(account_id, load, previous, trigger="assignment"),
                DomainEvent(
                    event_type=EVENT_TRUCK_AVAILABILITY_CHANGED,
                    account_id=account_id,
                    load_id=load.id,
                    payload={"truck_id": truck.id, "is_active": False},
                ),
            ])

        return load

    def advance_status(
        self,
        account_id: str,
        load_id: int,
        target: Optional[LoadStatus] = None
    ) -> Load:
        """
        Manual step to the next shipping status.

        Args:
            account_id: Operator account
            load_id: Load ID
            target: Requested status (default: the next one)

        Raises:
            InvalidTransitionError: Skip, regression, completion or assignment request
            LoadAlreadyCompletedError: Load is completed
        """
        account_id = _require_account(account_id)

        with self._unit_of_work() as pending_events:
            load = self._lock_load(account_id, load_id)

            if target is None:
                if load.status == LoadStatus.COMPLETED:
                    raise LoadAlreadyCompletedError(f"Load {load.id} is already completed")
                target = next_manual_status(load.status)
                if target is None:
                    raise InvalidTransitionError(
                        f"Load {load.id} is {LoadStatus(load.status).value}; "
                        "it completes once both sides are settled"
                    )

            previous = self.state_machine.advance(load, LoadStatus(target))
            self.db.flush()
            pending_events.append(self._status_event(account_id, load, previous, trigger="manual"))

        return load

    def record_payment(self, account_id: str, load_id: int, request: PaymentRequest) -> PaymentResult:
        """
        Record one payment and settle the load if both ledgers are full.

        Raises:
            ValidationError: Bad amount or payment fields
            ExceedsProviderFreightError / ExceedsTruckFreightError: Cap exceeded
                (``remaining`` carries the balance left)
            TruckFreightNotSetError, LoadAlreadyCompletedError,
            BalanceRequiresDeliveryError: Preconditions
            DatabaseError: Storage failure; nothing was written
        """
        account_id = _require_account(account_id)
        direction = _parse_enum(PaymentDirection, request.direction, "Payment direction")
        method = _parse_enum(PaymentMethod, request.payment_method, "Payment method")
        details = self._payment_details(method, request)

        with self._unit_of_work() as pending_events:
            load = self._lock_load(account_id, load_id)
            existing = self.transactions.list_for_load(load.id)
            totals = LedgerTotals.for_load(load, existing)

            sequence, transaction_type = next_sequence(
                txn for txn in existing if PaymentDirection(txn.payment_direction) == direction
            )

            check = self.validator.validate(load, totals, direction, request.amount, transaction_type)
            if not check.ok:
                logger.warning(
                    "payment_rejected",
                    load_id=load.id,
                    direction=direction.value,
                    amount=str(request.amount),
                    reason=check.reason.value,
                )
                check.raise_for_rejection()
            amount = check.amount

            if not self.loads.reserve_payment(load, direction, amount):
                error_cls = (
                    ExceedsProviderFreightError if direction == PaymentDirection.RECEIVED
                    else ExceedsTruckFreightError
                )
                raise error_cls(
                    f"Payment of {amount} no longer fits the {direction.value} cap",
                    remaining=totals.remaining_for(direction),
                )

            party_name = resolve_party_name(
                direction,
                provider=load.load_provider,
                truck=load.truck,
                placeholder=self.settings.driver_party_placeholder,
            )

            transaction = self.transactions.append(
                account_id=account_id,
                load_id=load.id,
                payment_direction=direction,
                transaction_type=transaction_type,
                payment_sequence=sequence,
                amount=amount,
                payment_method=method,
                party_name=party_name,
                **details,
            )

            status_before = LoadStatus(load.status)
            totals_after = self.settlement.evaluate(load, [*existing, transaction])
            completed = status_before != LoadStatus.COMPLETED and load.status == LoadStatus.COMPLETED
            self.db.flush()

            logger.info(
                "payment_recorded",
                load_id=load.id,
                direction=direction.value,
                sequence=sequence,
                transaction_type=transaction_type.value,
                amount=str(amount),
            )

            pending_events.append(DomainEvent(
                event_type=EVENT_PAYMENT_RECORDED,
                account_id=account_id,
                load_id=load.id,
                payload={
                    "transaction_id": transaction.id,
                    "direction": direction.value,
                    "transaction_type": transaction_type.value,
                    "sequence": sequence,
                    "amount": str(amount),
                    "total_received": str(totals_after.total_received),
                    "total_paid": str(totals_after.total_paid),
                },
            ))
            if completed:
                pending_events.extend(
                    self._completion_events(account_id, load, status_before, trigger="settlement")
                )

        return PaymentResult(transaction=transaction, totals=totals_after, load_completed=completed)

    def complete_load(self, account_id: str, load_id: int, reason: str) -> Load:
        """
        Manual override completion for loads without truck freight.

        Args:
            account_id: Operator account
            load_id: Load ID
            reason: Why the operator closes the load by hand

        Raises:
            ValidationError: Missing reason
            LoadAlreadyCompletedError: Already completed
            TruckFreightAgreedError: Load has truck freight and settles on its own
        """
        account_id = _require_account(account_id)
        reason = validate_required_string(reason, "Completion reason", MAX_NOTES_LENGTH)

        with self._unit_of_work() as pending_events:
            load = self._lock_load(account_id, load_id)
            if load.is_completed:
                raise LoadAlreadyCompletedError(f"Load {load.id} is already completed")
            if load.truck_freight_amount is not None:
                raise TruckFreightAgreedError(
                    f"Load {load.id} has truck freight agreed and completes once both sides are settled"
                )
            previous = self.state_machine.complete(load)
            self.db.flush()

            logger.info("load_completed_manually", load_id=load.id, reason=reason)
            pending_events.extend(
                self._completion_events(account_id, load, previous, trigger="manual_override", reason=reason)
            )

        return load

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @contextmanager
    def _unit_of_work(self):
        pending_events: List[DomainEvent] = []
        try:
            yield pending_events
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error committing load changes: {e}")
            raise DatabaseError("Failed to save load changes") from e
        except Exception:
            self.db.rollback()
            raise

        self.events.publish_all(pending_events)

    def _lock_load(self, account_id: str, load_id: int) -> Load:
        load = self.loads.get_for_update(account_id, load_id)
        if load is None:
            raise LoadNotFoundError(f"Load {load_id} not found")
        return load

    def _payment_details(self, method: PaymentMethod, request: PaymentRequest) -> Dict[str, Optional[str]]:
        upi_id = validate_optional_string(request.upi_id, "UPI ID", MAX_UPI_ID_LENGTH)
        if method == PaymentMethod.UPI and upi_id:
            upi_id = validate_upi_id(upi_id)

        return {
            "payment_details": validate_optional_string(
                request.payment_details, "Payment details", MAX_PAYMENT_DETAILS_LENGTH
            ),
            "notes": validate_optional_string(request.notes, "Notes", MAX_NOTES_LENGTH),
            "upi_id": upi_id,
            "bank_name": validate_optional_string(request.bank_name, "Bank name", MAX_BANK_NAME_LENGTH),
            "account_number": validate_optional_string(
                request.account_number, "Account number", MAX_ACCOUNT_NUMBER_LENGTH
            ),
            "ifsc_code": validate_optional_string(request.ifsc_code, "IFSC code", MAX_IFSC_CODE_LENGTH),
        }

    @staticmethod
    def _status_event(account_id: str, load: Load, previous: LoadStatus, **payload) -> DomainEvent:
        return DomainEvent(
            event_type=EVENT_LOAD_STATUS_CHANGED,
            account_id=account_id,
            load_id=load.id,
            payload={
                "from_status": LoadStatus(previous).value,
                "to_status": LoadStatus(load.status).value,
                **payload,
            },
        )

    def _completion_events(
        self,
        account_id: str,
        load: Load,
        previous: LoadStatus,
        **payload
    ) -> List[DomainEvent]:
        events = [
            self._status_event(account_id, load, previous, **payload),
            DomainEvent(
                event_type=EVENT_LOAD_COMPLETED,
                account_id=account_id,
                load_id=load.id,
                payload=dict(payload),
            ),
        ]
        if load.truck is not None:
            events.append(DomainEvent(
                event_type=EVENT_TRUCK_AVAILABILITY_CHANGED,
                account_id=account_id,
                load_id=load.id,
                payload={"truck_id": load.truck.id, "is_active": load.truck.is_active},
            ))
        return events


def _require_account(account_id: str) -> str:
    return validate_required_string(account_id, "Account id", MAX_ACCOUNT_ID_LENGTH)


def _parse_enum(enum_cls, value, field_name: str):
    try:
        return enum_cls(value)
    except ValueError as e:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}; got {value!r}") from e
