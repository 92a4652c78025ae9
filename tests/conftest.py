"""Shared fixtures."""

import logging

import pytest

from vpniptable.logging_config import LOGGER_NAME, reset_error_stats


@pytest.fixture(autouse=True)
def clean_logging():
    reset_error_stats()
    yield
    reset_error_stats()
    # CLI runs bind handlers to captured streams that are closed afterwards
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.propagate = True


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "addresses.yaml"
