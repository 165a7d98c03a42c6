"""Pytest configuration and shared fixtures."""

import logging

import pytest

from owasp_strength.policy import PasswordPolicy


@pytest.fixture
def policy():
    """Password policy with default thresholds."""
    return PasswordPolicy()


@pytest.fixture
def sample_config():
    """Sample configuration dictionary."""
    return {
        "password_policy": {
            "allow_passphrases": True,
            "min_length": 12,
            "max_length": 64,
            "min_phrase_length": 24,
            "min_optional_tests_to_pass": 3,
        },
        "logging": {
            "level": "DEBUG",
        },
    }


@pytest.fixture
def package_logger():
    """Package root logger, restored to its unconfigured state afterwards."""
    logger = logging.getLogger("owasp_strength")
    level = logger.level
    yield logger
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(level)
