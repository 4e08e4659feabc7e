"""
Queue-based rotating file logging.
Writes happen on a listener thread so request handlers never block on disk.
"""

import logging
import os
import queue
import sys
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler

from .structured_logger import build_formatter

ROUTED_LOGGERS = ("rentledger_backend", "sqlalchemy", "uvicorn")


class FileLogger:
    """Owns the log queue, its listener and the rotating file handler."""

    def __init__(
        self,
        log_file_path: str,
        max_bytes: int,
        backup_count: int,
        level: int,
        use_json_format: bool,
        service_version: str | None = None,
    ):
        log_dir = os.path.dirname(log_file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        formatter = build_formatter(use_json_format, service_version)
        handlers = [
            RotatingFileHandler(
                log_file_path, maxBytes=max_bytes, backupCount=backup_count
            ),
            logging.StreamHandler(sys.stdout),
        ]
        for handler in handlers:
            handler.setLevel(level)
            handler.setFormatter(formatter)

        log_queue: queue.Queue = queue.Queue()
        self.queue_handler = QueueHandler(log_queue)
        self.queue_handler.setLevel(level)
        self._listener = QueueListener(log_queue, *handlers, respect_handler_level=True)

    def start(self) -> None:
        self._listener.start()
        for name in ROUTED_LOGGERS:
            logger = logging.getLogger(name)
            logger.handlers.clear()
            logger.addHandler(self.queue_handler)
            if name != "rentledger_backend":
                logger.propagate = False

    def stop(self) -> None:
        """Flush pending records and detach the queue from every routed logger."""
        self._listener.stop()
        for handler in self._listener.handlers:
            handler.close()
        for name in ROUTED_LOGGERS:
            logger = logging.getLogger(name)
            logger.removeHandler(self.queue_handler)
            logger.propagate = True
