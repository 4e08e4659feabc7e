"""
Central logging configuration for RentLedger.
"""

import logging

from .file_logger import FileLogger
from .middleware import TransactionIdFilter
from .structured_logger import setup_structured_logging

_file_logger: FileLogger | None = None
_transaction_filter = TransactionIdFilter()


def setup_logging(settings) -> logging.Logger:
    """
    Set up logging from application settings.

    With ``log_to_file`` the records go through a queue to a rotating file
    and stdout; otherwise straight to stdout. A file that cannot be opened
    falls back to stdout with an error record.

    Args:
        settings: Loaded ``Settings`` instance

    Returns:
        The application's root logger
    """
    global _file_logger
    shutdown_logging()

    level = getattr(logging, settings.log_level.upper())
    use_json_format = settings.log_format.lower() == "json"
    logger = setup_structured_logging(
        level, use_json_format, service_version=settings.api_version
    )
    for handler in logger.handlers:
        handler.addFilter(_transaction_filter)

    if settings.log_to_file:
        try:
            file_logger = FileLogger(
                settings.log_file_path,
                max_bytes=settings.log_max_bytes,
                backup_count=settings.log_backup_count,
                level=level,
                use_json_format=use_json_format,
                service_version=settings.api_version,
            )
        except OSError as e:
            logger.error(f"Failed to setup file logging: {e}")
        else:
            file_logger.queue_handler.addFilter(_transaction_filter)
            file_logger.start()
            _file_logger = file_logger
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Get the application logger or one of its children."""
    if name:
        if name.startswith("rentledger_backend"):
            return logging.getLogger(name)
        return logging.getLogger(f"rentledger_backend.{name}")
    return logging.getLogger("rentledger_backend")


def shutdown_logging() -> None:
    """Stop the file listener, if any."""
    global _file_logger
    if _file_logger is not None:
        _file_logger.stop()
        _file_logger = None
