import json
import logging
from logging.handlers import QueueHandler

from rentledger_backend.config import settings
from rentledger_backend.core.logging import (
    get_logger,
    set_transaction_id,
    setup_logging,
    shutdown_logging,
)
from rentledger_backend.core.logging.structured_logger import build_formatter


def test_logger_names_are_namespaced():
    assert get_logger().name == "rentledger_backend"
    assert get_logger("portfolio").name == "rentledger_backend.portfolio"
    assert (
        get_logger("rentledger_backend.modules.sync").name
        == "rentledger_backend.modules.sync"
    )


def test_json_records_carry_transaction_id():
    set_transaction_id("txn-42")
    record = logging.LogRecord(
        name="rentledger_backend.portfolio",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Added tenant %s",
        args=("t9",),
        exc_info=None,
    )

    payload = json.loads(build_formatter(use_json_format=True).format(record))

    assert payload["message"] == "Added tenant t9"
    assert payload["transaction_id"] == "txn-42"
    assert payload["level"] == "INFO"
    assert payload["service"]["name"] == "rentledger-backend"


def test_text_records_name_the_logger():
    set_transaction_id("txn-7")
    record = logging.LogRecord(
        name="rentledger_backend.archive",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="Restore refused",
        args=(),
        exc_info=None,
    )
    record.transaction_id = "txn-7"

    line = build_formatter(use_json_format=False).format(record)

    assert "| WARNING | txn-7 | rentledger_backend.archive | Restore refused" in line


def test_file_logging_writes_json_and_detaches_on_shutdown(tmp_path):
    log_file = tmp_path / "logs" / "rentledger.log"
    file_settings = settings.model_copy(
        update={
            "log_to_file": True,
            "log_file_path": str(log_file),
            "log_format": "json",
            "log_level": "INFO",
        }
    )

    setup_logging(file_settings)
    set_transaction_id("txn-file")
    get_logger("reports").info("Report generated")
    shutdown_logging()

    payload = json.loads(log_file.read_text().strip().splitlines()[-1])
    assert payload["message"] == "Report generated"
    assert payload["transaction_id"] == "txn-file"
    assert payload["service"]["version"] == settings.api_version
    assert not any(
        isinstance(h, QueueHandler) for h in logging.getLogger("rentledger_backend").handlers
    )
