"""Shared FastAPI dependencies."""
from fastapi import Depends, Header
from sqlalchemy.orm import Session

from constants import ACCOUNT_ID_HEADER
from models import get_db
from services.events import EventBus
from services.load_service import LoadService

# Process-wide bus; observers subscribe at startup
event_bus = EventBus()


def get_account_id(account_id: str = Header(..., alias=ACCOUNT_ID_HEADER)) -> str:
    """Operator account the request acts for."""
    return account_id


def get_load_service(db: Session = Depends(get_db)) -> LoadService:
    """Load service bound to the request-scoped session."""
    return LoadService(db, events=event_bus)
