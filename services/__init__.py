"""Business logic services."""
from services.ledger import LedgerTotals, compute_totals, expected_profit
from services.payment_validator import PaymentValidator, PaymentCheck, RejectionReason
from services.transaction_sequencer import next_sequence, resolve_party_name
from services.truck_availability import TruckAvailabilityManager
from services.load_state_machine import LoadStateMachine
from services.settlement import SettlementTrigger
from services.events import DomainEvent, EventBus
from services.load_service import LoadService, NewLoad, PaymentRequest, PaymentResult, KathaSummary

__all__ = [
    "LedgerTotals",
    "compute_totals",
    "expected_profit",
    "PaymentValidator",
    "PaymentCheck",
    "RejectionReason",
    "next_sequence",
    "resolve_party_name",
    "TruckAvailabilityManager",
    "LoadStateMachine",
    "SettlementTrigger",
    "DomainEvent",
    "EventBus",
    "LoadService",
    "NewLoad",
    "PaymentRequest",
    "PaymentResult",
    "KathaSummary",
]
