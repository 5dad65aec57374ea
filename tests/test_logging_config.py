import logging

import pytest

from bioactivity_graph.logging_config import PACKAGE_LOGGER, resolve_level, setup_logging


@pytest.fixture(autouse=True)
def _clean_package_logger():
    yield
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.mark.parametrize("given,expected", [
    ("debug", logging.DEBUG),
    ("WARNING", logging.WARNING),
    (logging.ERROR, logging.ERROR),
    ("chatty", logging.INFO),
])
def test_resolve_level(given, expected):
    assert resolve_level(given) == expected


def test_file_handler_receives_package_records(tmp_path):
    log_file = tmp_path / "run.log"
    logger = setup_logging("debug", str(log_file))
    logging.getLogger("bioactivity_graph.chart").info("chart built")
    for handler in logger.handlers:
        handler.flush()
    text = log_file.read_text(encoding="utf-8")
    assert "bioactivity_graph.chart - INFO - chart built" in text


def test_repeated_setup_replaces_handlers():
    setup_logging()
    logger = setup_logging(logging.WARNING)
    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING
