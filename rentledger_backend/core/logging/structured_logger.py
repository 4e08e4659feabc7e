"""
Structured JSON log formatting for RentLedger.
"""

import logging
import sys
import traceback
from datetime import datetime
from typing import Any

from pythonjsonlogger.json import JsonFormatter

from .middleware import get_transaction_id

SERVICE_NAME = "rentledger-backend"

LOG_FORMAT = "%(timestamp)s %(level)s %(transaction_id)s %(message)s"
TEXT_FORMAT = "%(asctime)s | %(levelname)s | %(transaction_id)s | %(name)s | %(message)s"


class StructuredFormatter(JsonFormatter):
    """JSON formatter adding service, source and transaction fields."""

    service_version: str | None = None

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = datetime.now().astimezone().isoformat()
        log_record["transaction_id"] = getattr(
            record, "transaction_id", get_transaction_id()
        )
        log_record["level"] = record.levelname
        log_record["logger_name"] = record.name
        log_record["line"] = record.lineno
        log_record["service"] = {"name": SERVICE_NAME, "version": self.service_version}

        if record.exc_info and record.exc_info[0] is not None:
            log_record["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "stacktrace": traceback.format_exception(*record.exc_info),
            }


def build_formatter(
    use_json_format: bool, service_version: str | None = None
) -> logging.Formatter:
    """Return the JSON formatter or the plain text one."""
    if use_json_format:
        formatter = StructuredFormatter(fmt=LOG_FORMAT)
        formatter.service_version = service_version
        return formatter
    return logging.Formatter(TEXT_FORMAT)


def setup_structured_logging(
    level: int, use_json_format: bool, service_version: str | None = None
) -> logging.Logger:
    """Attach a stdout handler to the application logger."""
    logger = logging.getLogger("rentledger_backend")
    logger.setLevel(level)
    logger.handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(build_formatter(use_json_format, service_version))
    logger.addHandler(console_handler)

    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)

    return logger
