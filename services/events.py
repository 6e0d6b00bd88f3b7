"""In-process domain events for observers of the katha engine.

Handlers are plain functions registered per event type. The engine publishes
only after its commit succeeds; a failing handler is logged and does not
undo engine work or stop other handlers.
"""
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from constants import (
    EVENT_LOAD_CREATED,
    EVENT_TRUCK_ASSIGNED,
    EVENT_LOAD_STATUS_CHANGED,
    EVENT_PAYMENT_RECORDED,
    EVENT_LOAD_COMPLETED,
    EVENT_TRUCK_AVAILABILITY_CHANGED,
)
from utils.date_helpers import utc_timestamp
from logging_config import get_logger

logger = get_logger(__name__)

EVENT_TYPES = (
    EVENT_LOAD_CREATED,
    EVENT_TRUCK_ASSIGNED,
    EVENT_LOAD_STATUS_CHANGED,
    EVENT_PAYMENT_RECORDED,
    EVENT_LOAD_COMPLETED,
    EVENT_TRUCK_AVAILABILITY_CHANGED,
)

WILDCARD = "*"


@dataclass(frozen=True)
class DomainEvent:
    """Something that happened to a load."""

    event_type: str
    account_id: str
    load_id: Optional[int]
    payload: Dict[str, Any] = field(default_factory=dict)
    occurred_at: datetime = field(default_factory=utc_timestamp)


EventHandler = Callable[[DomainEvent], None]


class EventBus:
    """Synchronous publish/subscribe registry."""

    def __init__(self):
        self._handlers: Dict[str, List[EventHandler]] = defaultdict(list)

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        """
        Register a handler.

        Args:
            event_type: One of EVENT_TYPES, or "*" for every event
            handler: Callable taking the event
        """
        if event_type != WILDCARD and event_type not in EVENT_TYPES:
            raise ValueError(f"Unknown event type: {event_type}")
        self._handlers[event_type].append(handler)

    def unsubscribe(self, event_type: str, handler: EventHandler) -> None:
        if handler in self._handlers.get(event_type, []):
            self._handlers[event_type].remove(handler)

    def publish(self, event: DomainEvent) -> int:
        """
        Deliver an event to its handlers.

        Returns:
            Number of handlers that ran without error
        """
        delivered = 0
        for handler in [*self._handlers.get(event.event_type, []), *self._handlers.get(WILDCARD, [])]:
            try:
                handler(event)
                delivered += 1
            except Exception as e:
                logger.error(
                    "event_handler_failed",
                    event_type=event.event_type,
                    load_id=event.load_id,
                    handler=getattr(handler, "__name__", repr(handler)),
                    error=str(e),
                    exc_info=True,
                )
        return delivered

    def publish_all(self, events: List[DomainEvent]) -> None:
        for event in events:
            self.publish(event)


class RecordingHandler:
    """Handler that keeps every event it sees; used by observers and tests."""

    def __init__(self):
        self.events: List[DomainEvent] = []

    def __call__(self, event: DomainEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: str) -> List[DomainEvent]:
        return [e for e in self.events if e.event_type == event_type]
