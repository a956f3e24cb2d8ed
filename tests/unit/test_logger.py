"""
Tests for logging setup.
"""

import json
import logging

import pytest


@pytest.mark.unit
class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_writes_json_log_file(self, settings, clean_briefos_logger):
        """Test records from child loggers land in the JSON log file."""
        from briefos.utils.logger import configure_logging

        settings = settings.model_copy(update={"json_logs": True})
        logger = configure_logging(settings)
        logging.getLogger("briefos.storage").warning("disk is slow")
        for handler in logger.handlers:
            handler.flush()

        log_file = settings.log_dir + "/briefos.json.log"
        with open(log_file) as f:
            entry = json.loads(f.readline())

        assert entry["level"] == "WARNING"
        assert entry["message"] == "disk is slow"
        assert entry["logger"] == "briefos.storage"

    def test_idempotent(self, settings, clean_briefos_logger):
        """Test a second call adds no handlers."""
        from briefos.utils.logger import configure_logging

        configure_logging(settings)
        count = len(clean_briefos_logger.handlers)
        configure_logging(settings)

        assert count == 1
        assert len(clean_briefos_logger.handlers) == count

    def test_log_level_from_settings(self, settings, clean_briefos_logger):
        """Test log_level sets the briefos logger level."""
        from briefos.utils.logger import configure_logging

        settings = settings.model_copy(update={"log_level": "warning"})
        assert configure_logging(settings).level == logging.WARNING

    def test_debug_forces_debug_level(self, settings, clean_briefos_logger):
        """Test debug mode overrides log_level."""
        from briefos.utils.logger import configure_logging

        settings = settings.model_copy(update={"debug": True, "log_level": "ERROR"})
        logger = configure_logging(settings)

        assert logger.level == logging.DEBUG
        assert all(h.level == logging.DEBUG for h in logger.handlers)
