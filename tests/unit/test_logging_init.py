from __future__ import annotations

import logging
from io import StringIO
from unittest.mock import patch

import pricesync.logging.init as log_init
from pricesync.logging.init import (
    APP_LOGGER_NAME,
    LabeledFormatter,
    get_logger,
    log_summary,
    set_debug,
    setup_logging,
)


def _capture(logger: logging.Logger) -> StringIO:
    captured = StringIO()
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    handler = logging.StreamHandler(captured)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    return captured


def test_setup_logging_creates_logger_with_labeled_formatter():
    """Test that setup_logging creates the application logger with a labeled formatter."""
    logger = setup_logging()

    assert logger.name == APP_LOGGER_NAME == "pricesync"
    assert logger.level == logging.INFO
    assert logger.propagate is False
    assert len(logger.handlers) == 1
    handler = logger.handlers[0]
    assert isinstance(handler, logging.StreamHandler)
    assert isinstance(handler.formatter, LabeledFormatter)


def test_logging_labeled_prefixes():
    """Test that output lines carry INFO|WARN|ERROR|SUMMARY prefixes."""
    logger = setup_logging()
    captured = _capture(logger)

    logger.info("Test info message")
    logger.warning("Test warning message")
    logger.error("Test error message")
    logger.log(25, "Test summary message")

    lines = captured.getvalue().strip().split("\n")
    assert lines == [
        "INFO Test info message",
        "WARN Test warning message",
        "ERROR Test error message",
        "SUMMARY Test summary message",
    ]


def test_module_loggers_propagate_to_app_logger():
    """Test that pricesync.* module loggers write through the application handler."""
    logger = setup_logging()
    captured = _capture(logger)

    logging.getLogger("pricesync.services.matching").info("[MatchEngine] hello")

    assert captured.getvalue().strip() == "INFO [MatchEngine] hello"


def test_get_logger_returns_configured_logger():
    """Test that get_logger returns the configured logger instance."""
    configured = setup_logging()
    assert get_logger() is configured


def test_setup_logging_idempotent():
    """Test that calling setup_logging multiple times is safe."""
    logger1 = setup_logging()
    logger2 = setup_logging()

    assert logger1 is logger2
    assert len(logger1.handlers) == 1


def test_set_debug_toggles_levels():
    """Test that set_debug switches logger and handlers between DEBUG and INFO."""
    logger = setup_logging()
    set_debug(True)
    assert logger.level == logging.DEBUG
    assert all(h.level == logging.DEBUG for h in logger.handlers)
    set_debug(False)
    assert logger.level == logging.INFO
    assert all(h.level == logging.INFO for h in logger.handlers)


def test_summary_level_registered():
    """Test custom SUMMARY level (25) registration."""
    setup_logging()
    assert logging.getLevelName(25) == "SUMMARY"


def test_log_summary_convenience_function():
    """Test that log_summary writes one SUMMARY-prefixed line."""
    logger = setup_logging()
    captured = _capture(logger)

    log_summary("vendor_rows=3/3 company_rows=3/3 matched=2 orphaned=1 row_errors=0 elapsed_sec=0.5")

    lines = captured.getvalue().strip().split("\n")
    assert lines == [
        "SUMMARY vendor_rows=3/3 company_rows=3/3 matched=2 orphaned=1 row_errors=0 elapsed_sec=0.5"
    ]


def test_get_logger_sets_up_on_first_use():
    """Test that get_logger configures logging lazily."""
    log_init.reset_logging()
    with patch.object(log_init, "setup_logging", wraps=log_init.setup_logging) as mock_setup:
        logger = get_logger()
    mock_setup.assert_called_once()
    assert logger.name == APP_LOGGER_NAME
