"""
Unit tests for logging config.
"""

import logging

from topicmap.utils.logging_config import ColoredFormatter, LogLevel, get_logger, setup_logging


class TestLogLevel:
    """Test LogLevel enum."""

    def test_log_level_values(self):
        """Test LogLevel enum values."""
        assert LogLevel.MINIMAL == "minimal"
        assert LogLevel.NORMAL == "normal"
        assert LogLevel.DETAILED == "detailed"
        assert LogLevel.FULL == "full"


class TestSetupLogging:
    """Test setup_logging function."""

    def test_setup_logging_normal(self):
        """Normal mode logs INFO and up on the package logger."""
        logger = setup_logging(level=LogLevel.NORMAL)

        assert logger.name == "topicmap"
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1

    def test_setup_logging_minimal(self):
        """Minimal mode keeps warnings and errors only."""
        logger = setup_logging(level="minimal")

        assert logger.level == logging.WARNING

    def test_setup_logging_debug(self):
        """Debug and verbose flags override the level."""
        assert setup_logging(level=LogLevel.MINIMAL, debug=True).level == logging.DEBUG
        assert setup_logging(level=LogLevel.MINIMAL, verbose=True).level == logging.DEBUG

    def test_repeated_setup_does_not_stack_handlers(self):
        """Calling setup twice replaces handlers."""
        setup_logging()
        logger = setup_logging()

        assert len(logger.handlers) == 1

    def test_setup_logging_to_file(self, tmp_path):
        """File logging writes debug records with the module name."""
        log_file = tmp_path / "logs" / "test.log"
        logger = setup_logging(level=LogLevel.NORMAL, log_to_file=True, log_file=str(log_file))

        get_logger("topicmap.pipeline").info("file message")
        for handler in logger.handlers:
            handler.flush()

        assert log_file.exists()
        assert "topicmap.pipeline" in log_file.read_text(encoding="utf-8")
        for handler in logger.handlers:
            handler.close()
        setup_logging()


class TestGetLogger:
    """Test get_logger."""

    def test_prefixes_package_name(self):
        assert get_logger("cli").name == "topicmap.cli"

    def test_keeps_package_names(self):
        assert get_logger("topicmap.graph.layout").name == "topicmap.graph.layout"
        assert get_logger("topicmap").name == "topicmap"


class TestColoredFormatter:
    """Test ColoredFormatter."""

    def test_colors_level_without_mutating_record(self):
        formatter = ColoredFormatter("%(levelname)s | %(message)s")
        record = logging.LogRecord("topicmap", logging.WARNING, __file__, 1, "careful", None, None)

        output = formatter.format(record)

        assert "WARNING" in output
        assert output.endswith("careful")
        assert record.levelname == "WARNING"
