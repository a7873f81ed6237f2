"""Tests for logging setup."""

import logging

import pytest

from codegauge.exceptions import InvalidConfigError
from codegauge.logging_config import get_logger, level_for, setup_logging


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestLevels:
    def test_verbosity_names(self):
        assert level_for("quiet") == logging.ERROR
        assert level_for("normal") == logging.WARNING
        assert level_for("verbose") == logging.DEBUG

    def test_unknown_verbosity(self):
        with pytest.raises(InvalidConfigError):
            level_for("loud")


@pytest.mark.usefixtures("restore_root_logging")
class TestSetupLogging:
    def test_flags_map_to_levels(self):
        assert setup_logging(quiet=True).level == logging.ERROR
        assert setup_logging(verbose=True).level == logging.DEBUG
        assert setup_logging().level == logging.WARNING

    def test_verbosity_overrides_flags(self):
        logger = setup_logging(verbose=True, verbosity="quiet")
        assert logger.level == logging.ERROR

    def test_log_file_records_debug_when_quiet(self, tmp_path):
        log = tmp_path / "codegauge.log"
        setup_logging(verbosity="quiet", log_file=str(log))
        get_logger("metrics").debug("cc=3 for app.js")
        assert "codegauge.metrics - DEBUG - cc=3 for app.js" in log.read_text()


class TestGetLogger:
    def test_namespacing(self):
        assert get_logger().name == "codegauge"
        assert get_logger("metrics").name == "codegauge.metrics"
        assert get_logger("codegauge.api").name == "codegauge.api"
        assert get_logger("codegauge_extra").name == "codegauge.codegauge_extra"
