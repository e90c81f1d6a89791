# tests/test_logging_config.py

"""Tests for the per-run logging configuration."""

import logging
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from smartlist.config.logging_config import console_level, setup_logging
from smartlist.config.settings import Settings


class TestLoggingConfig(unittest.TestCase):
    """Verify logging setup behaviour."""

    def setUp(self) -> None:
        """Route logs to a temp dir and start without handlers."""
        self.logs_dir = Path(tempfile.mkdtemp()) / "logs"
        patcher = patch.object(Settings, "LOGS_DIR", self.logs_dir)
        patcher.start()
        self.addCleanup(patcher.stop)
        level_patcher = patch.object(Settings, "LOG_LEVEL", "WARNING")
        level_patcher.start()
        self.addCleanup(level_patcher.stop)

        self.root_logger = logging.getLogger("smartlist")
        self._saved = list(self.root_logger.handlers)
        self.root_logger.handlers.clear()
        self.addCleanup(self._restore)

    def _restore(self) -> None:
        for handler in self.root_logger.handlers:
            handler.close()
        self.root_logger.handlers[:] = self._saved

    def test_creates_log_file_in_logs_dir(self) -> None:
        """The run log lands in the configured logs directory."""
        log_path = setup_logging()
        self.assertTrue(log_path.exists())
        self.assertEqual(log_path.parent, self.logs_dir)
        self.assertRegex(log_path.name, r"^run_\d{8}_\d{6}\.log$")

    def test_handler_levels(self) -> None:
        """File captures DEBUG, console only WARNING and up."""
        setup_logging()
        by_type = {
            type(h): h.level for h in self.root_logger.handlers
        }
        self.assertEqual(by_type[logging.FileHandler], logging.DEBUG)
        self.assertEqual(by_type[logging.StreamHandler], logging.WARNING)
        self.assertEqual(self.root_logger.level, logging.DEBUG)

    def test_repeated_calls_no_duplicate_handlers(self) -> None:
        """Calling setup_logging twice keeps two handlers."""
        setup_logging()
        setup_logging()
        self.assertEqual(len(self.root_logger.handlers), 2)

    def _console_handler(self) -> logging.Handler:
        return next(
            h for h in self.root_logger.handlers
            if not isinstance(h, logging.FileHandler)
        )

    def test_verbose_lowers_console_to_info(self) -> None:
        """--verbose shows INFO on stderr; the file still gets DEBUG."""
        setup_logging(verbose=True)
        self.assertEqual(self._console_handler().level, logging.INFO)

    def test_repeated_call_updates_console_level(self) -> None:
        """A later verbose call adjusts the existing stderr handler."""
        setup_logging()
        setup_logging(verbose=True)
        self.assertEqual(len(self.root_logger.handlers), 2)
        self.assertEqual(self._console_handler().level, logging.INFO)

    def test_console_level_from_settings(self) -> None:
        """SMARTLIST_LOG_LEVEL picks the stderr level; junk falls back."""
        with patch.object(Settings, "LOG_LEVEL", "ERROR"):
            self.assertEqual(console_level(), logging.ERROR)
            self.assertEqual(console_level(verbose=True), logging.INFO)
        with patch.object(Settings, "LOG_LEVEL", "DEBUG"):
            self.assertEqual(console_level(verbose=True), logging.DEBUG)
        with patch.object(Settings, "LOG_LEVEL", "LOUD"):
            self.assertEqual(console_level(), logging.WARNING)

    def test_quiets_http_loggers(self) -> None:
        """Third-party HTTP loggers are capped at WARNING."""
        noisy = logging.getLogger("curl_cffi")
        saved = noisy.level
        self.addCleanup(noisy.setLevel, saved)
        noisy.setLevel(logging.DEBUG)
        setup_logging()
        self.assertEqual(noisy.level, logging.WARNING)

    def test_child_loggers_reach_file(self) -> None:
        """Engine loggers write into the run log."""
        log_path = setup_logging()
        logging.getLogger("smartlist.engine").debug("allocation trace line")
        for handler in self.root_logger.handlers:
            handler.flush()
        self.assertIn(
            "allocation trace line", log_path.read_text(encoding="utf-8")
        )


if __name__ == "__main__":
    unittest.main()
