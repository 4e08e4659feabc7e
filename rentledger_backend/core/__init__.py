"""Core infrastructure for RentLedger backend."""

from .exceptions import (
    BusinessLogicError,
    ExternalServiceError,
    PermissionError,
    RentLedgerError,
    ResourceAlreadyExistsError,
    ResourceNotFoundError,
    ValidationError,
)
from .formatting import format_long_date, format_naira, parse_lease_date
from .utils import generate_id, today, utc_now

__all__ = [
    "RentLedgerError",
    "ResourceNotFoundError",
    "ResourceAlreadyExistsError",
    "ValidationError",
    "BusinessLogicError",
    "PermissionError",
    "ExternalServiceError",
    "format_long_date",
    "format_naira",
    "parse_lease_date",
    "generate_id",
    "today",
    "utc_now",
]
