"""Unit tests for shape_lib.logging_config."""

import logging
import os
import sys
import tempfile
import unittest
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from shape_lib.logging_config import configure_logging


class TestConfigureLogging(unittest.TestCase):
    """Tests for configure_logging function."""

    def setUp(self):
        """Save original logging state."""
        self.root_logger = logging.getLogger()
        self.original_handlers = self.root_logger.handlers.copy()
        self.original_level = self.root_logger.level

    def tearDown(self):
        """Restore original logging state."""
        for handler in self.root_logger.handlers:
            if handler not in self.original_handlers:
                handler.close()
        self.root_logger.handlers = self.original_handlers
        self.root_logger.setLevel(self.original_level)

    def test_configure_logging_sets_level(self):
        """Test that configure_logging sets the log level."""
        configure_logging(level='DEBUG')

        self.assertEqual(self.root_logger.level, logging.DEBUG)

    def test_configure_logging_unknown_level_falls_back_to_info(self):
        """Test that an unknown level name means INFO."""
        configure_logging(level='CHATTY')

        self.assertEqual(self.root_logger.level, logging.INFO)

    def test_configure_logging_adds_console_handler(self):
        """Test that configure_logging adds a console handler."""
        configure_logging(level='INFO')

        stream_handlers = [
            h for h in self.root_logger.handlers
            if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
        ]
        self.assertEqual(len(stream_handlers), 1)

    def test_configure_logging_with_file(self):
        """Test that configure_logging can add a file handler."""

        with tempfile.NamedTemporaryFile(mode='w', suffix='.log', delete=False) as f:
            log_file = f.name

        try:
            configure_logging(level='INFO', log_file=log_file)

            file_handlers = [
                h for h in self.root_logger.handlers
                if isinstance(h, logging.FileHandler)
            ]
            self.assertEqual(len(file_handlers), 1)
        finally:
            for h in self.root_logger.handlers:
                h.close()
            os.unlink(log_file)

    def test_configure_logging_quiets_werkzeug(self):
        """Test that the request logger is limited to warnings."""
        configure_logging(level='DEBUG')

        self.assertEqual(logging.getLogger('werkzeug').level, logging.WARNING)


if __name__ == '__main__':
    unittest.main()
