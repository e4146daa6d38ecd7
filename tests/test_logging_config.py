import logging

import pytest

from conicexplorer.logging_config import PACKAGE_LOGGER, resolve_level, setup_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger(PACKAGE_LOGGER)
    yield logger
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


def test_resolve_level():
    assert resolve_level(logging.DEBUG) == logging.DEBUG
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level("WARNING") == logging.WARNING
    with pytest.raises(ValueError):
        resolve_level("loud")


def test_setup_is_idempotent(package_logger):
    setup_logging("debug")
    setup_logging("debug")

    assert package_logger.level == logging.DEBUG
    assert len(package_logger.handlers) == 1
    assert logging.getLogger("urllib3").level == logging.WARNING


def test_file_handler(package_logger, tmp_path):
    log_file = tmp_path / "conic.log"
    setup_logging(logging.INFO, log_file=str(log_file))

    assert len(package_logger.handlers) == 2
    for handler in package_logger.handlers:
        handler.flush()
    assert "Logging initialized" in log_file.read_text(encoding="utf-8")
