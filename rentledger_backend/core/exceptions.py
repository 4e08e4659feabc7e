"""
Application exception hierarchy.

Every error carries the HTTP status the API layer renders it with.
"""

from typing import Any


class RentLedgerError(Exception):
    """Base exception for all RentLedger errors."""

    status_code: int = 400

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ResourceNotFoundError(RentLedgerError):
    """Raised when a requested estate, tenant or archive entry does not exist."""

    status_code = 404

    def __init__(
        self,
        resource_type: str,
        identifier: Any,
        details: dict[str, Any] | None = None,
    ):
        message = f"{resource_type} with identifier '{identifier}' not found"
        super().__init__(message, details)
        self.resource_type = resource_type
        self.identifier = identifier


class ResourceAlreadyExistsError(RentLedgerError):
    """Raised when trying to create a resource that already exists."""

    status_code = 409

    def __init__(
        self,
        resource_type: str,
        identifier: Any,
        details: dict[str, Any] | None = None,
    ):
        message = f"{resource_type} with identifier '{identifier}' already exists"
        super().__init__(message, details)
        self.resource_type = resource_type
        self.identifier = identifier


class ValidationError(RentLedgerError):
    """Raised when input data fails a domain rule."""

    status_code = 422

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
        details: dict[str, Any] | None = None,
    ):
        if field:
            full_message = f"Validation error for field '{field}': {message}"
        else:
            full_message = message
        super().__init__(full_message, details)
        self.field = field
        self.value = value


class BusinessLogicError(RentLedgerError):
    """Raised when business logic constraints are violated."""

    status_code = 409


class PermissionError(RentLedgerError):
    """Raised when user lacks permission to perform an action."""

    status_code = 403

    def __init__(
        self, action: str, resource_type: str, details: dict[str, Any] | None = None
    ):
        message = f"Permission denied: cannot {action} {resource_type}"
        super().__init__(message, details)
        self.action = action
        self.resource_type = resource_type


class ExternalServiceError(RentLedgerError):
    """Raised when the document store or another collaborator fails."""

    status_code = 503

    def __init__(
        self,
        service_name: str,
        operation: str,
        details: dict[str, Any] | None = None,
    ):
        message = f"External service '{service_name}' failed during '{operation}'"
        super().__init__(message, details)
        self.service_name = service_name
        self.operation = operation
