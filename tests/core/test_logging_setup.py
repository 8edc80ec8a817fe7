"""Tests for walkwage.core.utils.logging."""

import os

import pytest
from loguru import logger

from walkwage.core.exceptions import ConfigurationError
from walkwage.core.utils.logging import normalize_level, setup_logging


@pytest.fixture(autouse=True)
def _restore_handlers():
    yield
    logger.remove()


class TestNormalizeLevel:
    def test_case_insensitive(self):
        assert normalize_level(" debug ") == "DEBUG"

    def test_unknown(self):
        with pytest.raises(ConfigurationError, match="Unknown log level"):
            normalize_level("chatty")


class TestSetupLogging:
    def test_writes_file_sink(self, tmp_dir):
        log_file = os.path.join(tmp_dir, "logs", "walkwage.log")
        setup_logging("INFO", log_file)
        logger.info("walk logged")
        logger.debug("not at this level")
        logger.complete()

        with open(log_file, encoding="utf-8") as f:
            text = f.read()
        assert "walk logged" in text
        assert "not at this level" not in text

    def test_stderr_only(self, tmp_dir):
        setup_logging("WARNING")
        assert os.listdir(tmp_dir) == []
