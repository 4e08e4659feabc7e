"""
Request correlation for logging.
Every request runs under a transaction id echoed in the x-transaction-id header.
"""

import logging
import time
import uuid
from collections.abc import Callable
from contextvars import ContextVar

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

TRANSACTION_HEADER = "x-transaction-id"

_transaction_id: ContextVar[str | None] = ContextVar("transaction_id", default=None)


def generate_transaction_id() -> str:
    """Generate a short transaction id for request tracking."""
    return uuid.uuid4().hex[:8]


def get_transaction_id() -> str:
    """Get the current transaction id, creating one outside of a request."""
    txn_id = _transaction_id.get()
    if txn_id is None:
        txn_id = generate_transaction_id()
        _transaction_id.set(txn_id)
    return txn_id


def set_transaction_id(txn_id: str) -> None:
    """Set the transaction id for the current context."""
    _transaction_id.set(txn_id)


class TransactionIdFilter(logging.Filter):
    """Logging filter that stamps the transaction id on every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.transaction_id = get_transaction_id()
        return True


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Assigns a transaction id per request and logs its outcome and duration."""

    def __init__(self, app):
        super().__init__(app)
        self.logger = logging.getLogger("rentledger_backend.requests")

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        txn_id = request.headers.get(TRANSACTION_HEADER) or generate_transaction_id()
        set_transaction_id(txn_id)

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self.logger.error(
                "Request failed",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "duration_ms": round((time.perf_counter() - start_time) * 1000, 2),
                },
                exc_info=True,
            )
            raise

        self.logger.info(
            "Request completed",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round((time.perf_counter() - start_time) * 1000, 2),
            },
        )
        response.headers[TRANSACTION_HEADER] = txn_id
        return response
