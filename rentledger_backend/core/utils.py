"""Common utilities for RentLedger backend."""

import time
import uuid
from datetime import date, datetime, timezone


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)


def today() -> date:
    """Get the current calendar date used for lease arithmetic."""
    return date.today()


def generate_id(prefix: str) -> str:
    """Generate a record id like est-1718023412345-1a2b3c."""
    millis = int(time.time() * 1000)
    return f"{prefix}-{millis}-{uuid.uuid4().hex[:6]}"
