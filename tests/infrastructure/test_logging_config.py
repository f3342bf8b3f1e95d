"""Tests for the logging setup."""

import io
import logging

from litdist.infrastructure.logging_config import configure_logging, reset_logging


def teardown_function():
    reset_logging()


def test_records_go_to_stream():
    stream = io.StringIO()
    configure_logging("info", stream)
    logging.getLogger("litdist.domain.service.inventory_ledger").info("Reserved %d", 3)
    assert "INFO litdist.domain.service.inventory_ledger: Reserved 3" in stream.getvalue()


def test_is_idempotent():
    configure_logging("DEBUG", io.StringIO())
    configure_logging("DEBUG", io.StringIO())
    assert len(logging.getLogger("litdist").handlers) == 1


def test_unknown_level_falls_back_to_warning():
    configure_logging("LOUD", io.StringIO())
    assert logging.getLogger("litdist").level == logging.WARNING
