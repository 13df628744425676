"""Tests for logging configuration."""

import logging

from ingredient_catalog.app_logging import ContextFormatter, configure_logging


def test_configure_logging_idempotent() -> None:
    logger = logging.getLogger("ingredient_catalog")
    logger.handlers.clear()

    configure_logging()
    first_count = len(logger.handlers)

    configure_logging("DEBUG")
    second_count = len(logger.handlers)

    assert first_count == 1
    assert second_count == 1
    assert logger.level == logging.DEBUG


def test_context_formatter_appends_extra_fields() -> None:
    formatter = ContextFormatter("%(levelname)s: %(message)s")
    logger = logging.getLogger("ingredient_catalog.tests")
    record = logger.makeRecord(
        logger.name,
        logging.WARNING,
        __file__,
        1,
        "FDC search failed",
        None,
        None,
        extra={"status": "503", "query": "oats"},
    )

    assert formatter.format(record) == (
        "WARNING: FDC search failed [query=oats status=503]"
    )


def test_context_formatter_without_extra_fields() -> None:
    formatter = ContextFormatter("%(message)s")
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "plain", None, None)

    assert formatter.format(record) == "plain"
