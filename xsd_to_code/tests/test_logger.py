"""
Tests for the package logger helpers.
"""

import logging

import pytest

from xsd_to_code.logger import get_loglevel, logger, set_logging_level


@pytest.fixture
def restore_level():
    level = logger.level
    yield
    logger.setLevel(level)


@pytest.mark.parametrize("verbosity, level", [(0, logging.WARNING), (1, logging.INFO), (2, logging.DEBUG), (5, logging.DEBUG)])
def test_get_loglevel(verbosity, level):
    assert get_loglevel(verbosity) == level


def test_set_logging_level(restore_level):
    set_logging_level(" debug ")
    assert logger.level == logging.DEBUG
    set_logging_level(logging.ERROR)
    assert logger.level == logging.ERROR


def test_invalid_level(restore_level):
    with pytest.raises(ValueError):
        set_logging_level("LOUD")


if __name__ == "__main__":
    pytest.main([__file__])
