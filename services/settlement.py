"""Automatic close-out once both ledgers are fully settled."""
from typing import Iterable

from models import Load
from services.ledger import LedgerTotals
from services.load_state_machine import LoadStateMachine
from logging_config import get_logger

logger = get_logger(__name__)


class SettlementTrigger:
    """
    Runs inline after every recorded transaction.

    A load completes when truck freight is set, the provider has paid the
    full freight and the driver has been paid the full truck freight. Loads
    without truck freight never settle here; they need the manual override.
    """

    def __init__(self, state_machine: LoadStateMachine):
        self.state_machine = state_machine

    def evaluate(self, load: Load, transactions: Iterable) -> LedgerTotals:
        """
        Recompute totals including the newest entry and complete if settled.

        Args:
            load: Load that just received a transaction
            transactions: All of the load's transactions, new one included

        Returns:
            Ledger totals the decision was based on
        """
        totals = LedgerTotals.for_load(load, transactions)

        if load.is_completed:
            return totals

        if totals.is_settled:
            logger.info(
                "load_settled",
                load_id=load.id,
                total_received=str(totals.total_received),
                total_paid=str(totals.total_paid),
            )
            self.state_machine.complete(load)
        elif totals.truck_freight_amount is None and totals.balance_to_receive <= 0:
            logger.info("load_awaiting_manual_completion", load_id=load.id)

        return totals
