# tests/unit/test_logging_utils.py
import logging

import pytest

from fx_inventory_engine import config
from fx_inventory_engine.logging_utils import (
    CorrelationIdFilter,
    correlation_id_var,
    generate_correlation_id,
    setup_logging,
)


@pytest.fixture
def restore_root_logger():
    root_logger = logging.getLogger()
    handlers, level = list(root_logger.handlers), root_logger.level
    yield root_logger
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


def test_setup_logging_installs_a_single_json_handler(restore_root_logger):
    setup_logging(level="DEBUG")
    setup_logging(level="DEBUG")

    handlers = restore_root_logger.handlers
    assert len(handlers) == 1
    assert restore_root_logger.level == logging.DEBUG
    assert any(isinstance(f, CorrelationIdFilter) for f in handlers[0].filters)


def test_setup_logging_defaults_to_configured_level(restore_root_logger, monkeypatch):
    monkeypatch.setattr(config, "LOG_LEVEL", "WARNING")

    setup_logging()

    assert restore_root_logger.level == logging.WARNING


def test_filter_injects_correlation_id():
    record = logging.LogRecord("test", logging.INFO, __file__, 1, "message", None, None)
    token = correlation_id_var.set("UTIL:abc")
    try:
        assert CorrelationIdFilter().filter(record)
    finally:
        correlation_id_var.reset(token)

    assert record.correlation_id == "UTIL:abc"
    assert record.service == "fx-inventory-engine"


def test_generate_correlation_id_uses_prefix():
    correlation_id = generate_correlation_id("UTIL")
    prefix, _, suffix = correlation_id.partition(":")
    assert prefix == "UTIL"
    assert len(suffix) == 36
